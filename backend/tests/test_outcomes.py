"""Outcome recording: winners/losers sync + validation, results, and the title-change workflow."""
from datetime import date, timedelta

import pytest
from sqlmodel import Session

from ringside.errors import InvariantViolation
from ringside.services.championships import current_champion, title_history
from ringside.services.match_builder import MatchBuilder
from ringside.services.outcomes import record_result, record_title_change, set_losers, set_winners
from ringside.services.roster_factory import (
    create_match_decision,
    create_match_type,
    create_title,
    create_wrestler,
)


@pytest.fixture
def fatal_four_way(session: Session):
    match_type = create_match_type(session, total_competitors=4, number_of_sides=4)
    match = MatchBuilder(session).with_match_type(match_type).build()
    return match, [link.wrestler_id for link in match.wrestler_links]


PLAYED_ON = date.today() - timedelta(days=14)


@pytest.fixture
def title_match(session: Session):
    """Singles title match played two weeks ago: incumbent vs challenger."""
    title = create_title(session, introduced_at=date(2020, 1, 1))
    incumbent = create_wrestler(session, name="Incumbent")
    challenger = create_wrestler(session, name="Challenger")
    match = (
        MatchBuilder(session)
        .with_title(title)
        .with_champion(incumbent)
        .with_wrestler(challenger)
        .on_date(PLAYED_ON)
        .build()
    )
    return {"match": match, "title": title, "incumbent": incumbent, "challenger": challenger}


def test_set_winners_replaces_previous_winners(session: Session, fatal_four_way):
    match, ids = fatal_four_way

    set_winners(session, match, [ids[0], ids[1]])
    assert sorted(w.id for w in match.winners) == sorted(ids[:2])

    set_winners(session, match, [ids[2]])
    session.commit()
    session.refresh(match)
    assert [w.id for w in match.winners] == [ids[2]]


def test_set_losers_records_losers(session: Session, fatal_four_way):
    match, ids = fatal_four_way

    set_winners(session, match, [ids[0]])
    set_losers(session, match, ids[1:])

    assert sorted(w.id for w in match.losers) == sorted(ids[1:])


def test_winner_outside_match_is_rejected(session: Session, fatal_four_way):
    match, ids = fatal_four_way
    outsider = create_wrestler(session)

    with pytest.raises(InvariantViolation) as exc_info:
        set_winners(session, match, [ids[0], outsider.id])

    assert exc_info.value.code == "NOT_A_PARTICIPANT"
    assert match.winners == []


def test_winners_and_losers_must_be_disjoint(session: Session, fatal_four_way):
    match, ids = fatal_four_way
    set_losers(session, match, [ids[0], ids[1]])

    with pytest.raises(InvariantViolation) as exc_info:
        set_winners(session, match, [ids[1]])

    assert exc_info.value.code == "WINNERS_LOSERS_OVERLAP"


def test_record_result_sets_decision_and_text(session: Session, fatal_four_way):
    match, _ = fatal_four_way
    decision = create_match_decision(session, name="Pinfall")

    record_result(session, match, decision=decision, result="Won with a roll-up at 12:04")

    assert match.decision.slug == "pinfall"
    assert match.result == "Won with a roll-up at 12:04"


def test_set_winners_does_not_move_titles(session: Session, title_match):
    match = title_match["match"]

    set_winners(session, match, [title_match["challenger"].id])

    assert current_champion(session, title_match["title"]).wrestler_id == title_match["incumbent"].id


def test_title_change_closes_old_reign_and_opens_new_one(session: Session, title_match):
    match, title = title_match["match"], title_match["title"]
    challenger = title_match["challenger"]
    set_winners(session, match, [challenger.id])
    set_losers(session, match, [title_match["incumbent"].id])

    opened = record_title_change(session, match)

    assert len(opened) == 1
    assert opened[0].wrestler_id == challenger.id
    assert opened[0].won_on == PLAYED_ON
    history = title_history(session, title)
    assert [r.wrestler_id for r in history] == [title_match["incumbent"].id, challenger.id]
    assert history[0].lost_on == PLAYED_ON
    assert current_champion(session, title).wrestler_id == challenger.id


def test_title_retained_counts_a_defense(session: Session, title_match):
    match, title = title_match["match"], title_match["title"]
    set_winners(session, match, [title_match["incumbent"].id])

    opened = record_title_change(session, match)

    assert opened == []
    reign = current_champion(session, title)
    assert reign.wrestler_id == title_match["incumbent"].id
    assert reign.successful_defenses == 1


def test_title_change_needs_a_single_winner(session: Session, title_match):
    with pytest.raises(InvariantViolation) as exc_info:
        record_title_change(session, title_match["match"])

    assert exc_info.value.code == "TITLE_CHANGE_WINNERS"


def test_title_change_on_non_title_match_is_a_no_op(session: Session, fatal_four_way):
    match, ids = fatal_four_way
    set_winners(session, match, [ids[0]])

    assert record_title_change(session, match) == []


def test_title_change_runs_once_per_match(session: Session, title_match):
    match, title = title_match["match"], title_match["title"]
    set_winners(session, match, [title_match["incumbent"].id])
    record_title_change(session, match)

    with pytest.raises(InvariantViolation) as exc_info:
        record_title_change(session, match)

    assert exc_info.value.code == "TITLES_ALREADY_CHANGED"
    assert current_champion(session, title).successful_defenses == 1


def test_corrected_winner_cannot_rerun_title_change(session: Session, title_match):
    match, title = title_match["match"], title_match["title"]
    set_winners(session, match, [title_match["challenger"].id])
    opened = record_title_change(session, match)
    assert opened[0].won_in_match_id == match.id
    assert match.titles_changed_at is not None

    set_winners(session, match, [title_match["incumbent"].id])
    with pytest.raises(InvariantViolation) as exc_info:
        record_title_change(session, match)

    assert exc_info.value.code == "TITLES_ALREADY_CHANGED"
    assert len(title_history(session, title)) == 2
    assert current_champion(session, title).wrestler_id == title_match["challenger"].id


def test_title_change_for_scheduled_match_is_refused(session: Session):
    title = create_title(session, introduced_at=date(2020, 1, 1))
    incumbent = create_wrestler(session)
    challenger = create_wrestler(session)
    match = MatchBuilder(session).with_title(title).with_champion(incumbent).with_wrestler(challenger).scheduled().build()
    set_winners(session, match, [challenger.id])

    with pytest.raises(InvariantViolation) as exc_info:
        record_title_change(session, match)

    assert exc_info.value.code == "MATCH_NOT_PLAYED"
    assert current_champion(session, title).wrestler_id == incumbent.id
    assert match.titles_changed_at is None


def test_title_change_for_match_played_today_is_allowed(session: Session):
    title = create_title(session, introduced_at=date(2020, 1, 1))
    challenger = create_wrestler(session)
    match = MatchBuilder(session).with_title(title).with_wrestler(challenger).on_date(date.today()).build()
    set_winners(session, match, [challenger.id])

    opened = record_title_change(session, match)

    assert opened[0].won_on == date.today()
