from __future__ import annotations

from rally.contracts import TeamColorScheme

TEAM_LABELS: tuple[str, ...] = ("A", "B", "C", "D")

TEAM_COLORS: tuple[TeamColorScheme, ...] = (
    TeamColorScheme(
        name="blue",
        background="from-blue-50 to-blue-100",
        border="border-blue-200",
        text="text-blue-800",
        badge="bg-blue-200 text-blue-800",
    ),
    TeamColorScheme(
        name="red",
        background="from-red-50 to-red-100",
        border="border-red-200",
        text="text-red-800",
        badge="bg-red-200 text-red-800",
    ),
    TeamColorScheme(
        name="green",
        background="from-green-50 to-green-100",
        border="border-green-200",
        text="text-green-800",
        badge="bg-green-200 text-green-800",
    ),
    TeamColorScheme(
        name="purple",
        background="from-purple-50 to-purple-100",
        border="border-purple-200",
        text="text-purple-800",
        badge="bg-purple-200 text-purple-800",
    ),
)

# Growing past four teams means extending both tuples.
MAX_TEAMS = min(len(TEAM_LABELS), len(TEAM_COLORS))
MIN_TEAMS = 2
SUPPORTED_TEAM_COUNTS: tuple[int, ...] = tuple(range(MIN_TEAMS, MAX_TEAMS + 1))


def display_name(label: str) -> str:
    return f"Team {label}"
