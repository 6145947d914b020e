"""BDD step definitions for tally features."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from logtally.adapters.async_utils import _run_sync as run_sync
from logtally.adapters.index.in_memory import InMemoryLogIndex
from logtally.adapters.sources import iter_lines
from logtally.config import parse_date_bound
from logtally.core.filtering import to_rows
from logtally.core.models import FilterCriteria, IngestStats
from logtally.core.pipeline import run_pipeline


@dataclass
class TallyScenarioContext:
    """Shared state between steps in a tally scenario."""

    lines: list[str] = field(default_factory=list)
    address_start: str = ""
    address_mask: str = ""
    first_day: str = ""
    last_day: str = ""
    counts: dict[str, int] = field(default_factory=dict)
    stats: IngestStats = field(default_factory=IngestStats)

    def criteria(self) -> FilterCriteria:
        return FilterCriteria(
            address_start=self.address_start,
            address_mask=self.address_mask,
            time_start=parse_date_bound(self.first_day),
            time_end=parse_date_bound(self.last_day, end_of_day=True),
        )


@pytest.fixture
def ctx() -> TallyScenarioContext:
    """Fresh scenario context for each test."""
    return TallyScenarioContext()


# === Given ===


@given(parsers.parse('a log line "{line}"'))
def given_log_line(ctx: TallyScenarioContext, line: str) -> None:
    ctx.lines.append(line + "\n")


@given(parsers.parse('the address range from "{start}" to "{mask}"'))
def given_address_range(ctx: TallyScenarioContext, start: str, mask: str) -> None:
    ctx.address_start = start
    ctx.address_mask = mask


@given(parsers.parse('the address range starting at "{start}" with no mask'))
def given_address_start_only(ctx: TallyScenarioContext, start: str) -> None:
    ctx.address_start = start
    ctx.address_mask = ""


@given(parsers.parse('the date window from "{first}" to "{last}"'))
def given_date_window(ctx: TallyScenarioContext, first: str, last: str) -> None:
    ctx.first_day = first
    ctx.last_day = last


# === When ===


@when("the log is tallied")
def when_tallied(ctx: TallyScenarioContext) -> None:
    """Run the full pipeline over the collected lines."""
    ctx.counts, ctx.stats = run_sync(
        run_pipeline(iter_lines(ctx.lines), InMemoryLogIndex(), ctx.criteria())
    )


# === Then ===


@then(parsers.parse('the tally is "{expected}"'))
def then_tally_is(ctx: TallyScenarioContext, expected: str) -> None:
    """Compare against comma-separated address:count pairs in address order."""
    actual = ",".join(f"{row.address}:{row.count}" for row in to_rows(ctx.counts))
    assert actual == expected


@then("the tally is empty")
def then_tally_empty(ctx: TallyScenarioContext) -> None:
    assert ctx.counts == {}


@then(parsers.parse("{n:d} records were indexed"))
def then_records_indexed(ctx: TallyScenarioContext, n: int) -> None:
    assert ctx.stats.records == n
