from datetime import date

import pytest
from sqlmodel import Session

from ringside.errors import InvariantViolation
from ringside.models.championship import Championship
from ringside.services.championships import (
    close_championship,
    current_champion,
    group_champions_by_title,
    open_championship,
    title_history,
    titles_with_current_champions,
)
from ringside.services.match_builder import MatchBuilder
from ringside.services.roster_factory import create_title, create_wrestler


def test_vacant_title_has_no_current_champion(session: Session):
    title = create_title(session)

    assert current_champion(session, title) is None


def test_open_championship_becomes_current(session: Session):
    title = create_title(session)
    wrestler = create_wrestler(session)

    reign = open_championship(session, title, wrestler, date(2026, 1, 5))

    assert current_champion(session, title).id == reign.id


def test_second_open_reign_is_rejected(session: Session):
    title = create_title(session)
    open_championship(session, title, create_wrestler(session), date(2026, 1, 5))

    with pytest.raises(InvariantViolation) as exc_info:
        open_championship(session, title, create_wrestler(session), date(2026, 2, 5))

    assert exc_info.value.code == "TITLE_ALREADY_HELD"


def test_closed_reign_frees_the_title(session: Session):
    title = create_title(session)
    first, second = create_wrestler(session), create_wrestler(session)
    reign = open_championship(session, title, first, date(2026, 1, 5))

    close_championship(session, reign, date(2026, 3, 1))
    open_championship(session, title, second, date(2026, 3, 1))

    history = title_history(session, title)
    assert [r.wrestler_id for r in history] == [first.id, second.id]
    assert current_champion(session, title).wrestler_id == second.id


def test_reign_cannot_end_before_it_began(session: Session):
    reign = open_championship(session, create_title(session), create_wrestler(session), date(2026, 1, 5))

    with pytest.raises(InvariantViolation):
        close_championship(session, reign, date(2025, 12, 31))


def test_multiple_open_reigns_written_around_the_ledger_are_detected(session: Session):
    title = create_title(session)
    for _ in range(2):
        session.add(Championship(title_id=title.id, wrestler_id=create_wrestler(session).id, won_on=date(2026, 1, 1)))
    session.flush()

    with pytest.raises(InvariantViolation) as exc_info:
        current_champion(session, title)

    assert exc_info.value.code == "MULTIPLE_OPEN_REIGNS"


def test_titles_with_current_champions_pairs_each_title(session: Session):
    held = create_title(session, name="Intercontinental")
    vacant = create_title(session, name="Hardcore")
    champion = create_wrestler(session)
    reign = open_championship(session, held, champion, date(2026, 1, 1))

    match = MatchBuilder(session).with_titles([held, vacant]).build()

    pairs = titles_with_current_champions(session, match)
    assert [(t.id, c.id if c else None) for t, c in pairs] == [(held.id, reign.id), (vacant.id, None)]


def test_group_champions_by_title(session: Session):
    title_a, title_b = create_title(session), create_title(session)
    reigns = []
    for title, count in ((title_a, 2), (title_b, 4)):
        for i in range(count):
            reigns.append(
                Championship(
                    title_id=title.id,
                    wrestler_id=create_wrestler(session).id,
                    won_on=date(2025, 1 + i, 1),
                    lost_on=date(2025, 2 + i, 1),
                )
            )

    grouped = group_champions_by_title(reigns)

    assert len(grouped[title_a.id]) == 2
    assert len(grouped[title_b.id]) == 4
