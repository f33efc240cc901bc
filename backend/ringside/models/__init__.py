from ringside.models.championship import Championship
from ringside.models.event import Event
from ringside.models.match import Match
from ringside.models.match_decision import MatchDecision
from ringside.models.match_links import MatchLoser, MatchReferee, MatchTitle, MatchWinner, MatchWrestler
from ringside.models.match_type import MatchType
from ringside.models.permission import Permission
from ringside.models.referee import Referee
from ringside.models.role import PermissionRole, Role, RoleUser
from ringside.models.stipulation import Stipulation
from ringside.models.title import Title
from ringside.models.user import User
from ringside.models.wrestler import Wrestler

__all__ = [
    "Event",
    "Match",
    "MatchType",
    "MatchDecision",
    "Stipulation",
    "MatchWrestler",
    "MatchReferee",
    "MatchTitle",
    "MatchWinner",
    "MatchLoser",
    "Wrestler",
    "Referee",
    "Title",
    "Championship",
    "User",
    "Role",
    "Permission",
    "RoleUser",
    "PermissionRole",
]
