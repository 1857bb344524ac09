# hackboard/scoring/aggregator.py
"""
Overall Score Aggregator
------------------------
Turns a project's per-category scores into one ranking value on the 0-5
scale.

Formula (categories with weight > 0 and a non-zero score only):
    overall = Σ (score × weight) / Σ weight        0 when nothing counts

A score of 0 means "not judged yet" and is left out of both sums, so a
partially judged project still ranks on what has been judged.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping

from hackboard.models.hackathon import Category, HackathonData, Project

PODIUM_SIZE = 3


def overall_score(scores: Mapping[str, int], categories: Iterable[Category]) -> float:
    """Weighted mean of the judged categories."""
    weighted_sum = 0.0
    total_weight = 0.0

    for category in categories:
        if category.weight <= 0:
            continue
        score = scores.get(category.id, 0)
        if not score:
            continue
        weighted_sum += score * category.weight
        total_weight += category.weight

    if total_weight == 0:
        return 0.0
    return weighted_sum / total_weight


def format_score(score: float) -> str:
    return f"{score:.2f}"


@dataclass
class RankedProject:
    project: Project
    overall_score: float


@dataclass
class Leaderboard:
    """Public leaderboard view of one dataset."""
    podium: List[RankedProject] = field(default_factory=list)
    others: List[RankedProject] = field(default_factory=list)
    award_winners: List[Project] = field(default_factory=list)


def rank_projects(data: HackathonData) -> List[RankedProject]:
    """
    Projects ordered by overall score, highest first.

    Ties keep collection order (sorted() is stable), so the first listed
    project wins a tie.
    """
    ranked = [
        RankedProject(project=p, overall_score=overall_score(p.scores, data.config.categories))
        for p in data.projects
    ]
    return sorted(ranked, key=lambda r: -r.overall_score)


def build_leaderboard(data: HackathonData, results_published: bool) -> Leaderboard:
    """
    Split the ranking for display.

    Published: podium holds the top 3, the rest are listed by title.
    Unpublished: no podium, every project listed by title so the order
    gives nothing away.
    """
    ranked = rank_projects(data)
    winners = [p for p in data.projects if p.special_awards]

    def by_title(entries: List[RankedProject]) -> List[RankedProject]:
        return sorted(entries, key=lambda r: r.project.title.casefold())

    if not results_published:
        return Leaderboard(podium=[], others=by_title(ranked), award_winners=winners)

    others = by_title(ranked[PODIUM_SIZE:])
    return Leaderboard(podium=ranked[:PODIUM_SIZE], others=others, award_winners=winners)
