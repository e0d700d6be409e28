"""
Relevance scoring and Maximal Marginal Relevance (MMR) selection.

Relevance blends content similarity to the user's favorites with an
author match bonus and saturating popularity signals:

    score = 6.0*sim + 2.5*author + 1.6*editions + 2.0*rating_avg + 2.0*rating_count

MMR then picks items greedily by ``0.72*score - 0.28*redundancy``, where
redundancy is the highest Jaccard similarity to anything already picked.
"""

import logging
import math

from app.domain.entities import ORIGIN_AUTHOR, Candidate, ScoredCandidate, SeedProfile
from app.services.similarity import extract_tokens, jaccard_similarity

logger = logging.getLogger(__name__)

W_SIM = 6.0
W_AUTHOR = 2.5
W_POP_EDITIONS = 1.6
W_POP_AVERAGE = 2.0
W_POP_COUNT = 2.0
MMR_LAMBDA = 0.72

LIMIT_FINAL = 24
MMR_POOL_FACTOR = 2


def candidate_tokens(candidate: Candidate) -> set[str]:
    subjects = [candidate.subject_tag] if candidate.subject_tag else []
    return extract_tokens(candidate.title, candidate.primary_author, subjects)


def relevance_score(candidate: Candidate, tokens: set[str], profile: SeedProfile) -> float:
    sim = max(
        (jaccard_similarity(tokens, fav) for fav in profile.favorite_token_sets),
        default=0.0,
    )
    author_boost = 1.0 if candidate.origin == ORIGIN_AUTHOR else 0.0
    pop_editions = min(3.0, math.log2(1 + (candidate.edition_count or 0))) / 3
    pop_average = (candidate.ratings_average or 0.0) / 5
    pop_count = min(1.0, math.log10(1 + (candidate.ratings_count or 0)) / 3)
    return (
        W_SIM * sim
        + W_AUTHOR * author_boost
        + W_POP_EDITIONS * pop_editions
        + W_POP_AVERAGE * pop_average
        + W_POP_COUNT * pop_count
    )


def score_candidates(candidates: list[Candidate], profile: SeedProfile) -> list[ScoredCandidate]:
    scored = []
    for candidate in candidates:
        tokens = candidate_tokens(candidate)
        scored.append(
            ScoredCandidate(
                candidate=candidate,
                score=relevance_score(candidate, tokens, profile),
                tokens=tokens,
            )
        )
    return scored


def mmr_select(
    scored: list[ScoredCandidate],
    limit: int = LIMIT_FINAL,
    mmr_lambda: float = MMR_LAMBDA,
) -> list[ScoredCandidate]:
    """
    Greedy MMR over at most ``min(2 * limit, len(scored))`` slots, stopping
    once ``limit`` items are chosen. Ties keep the earlier candidate.
    """
    slots = min(limit * MMR_POOL_FACTOR, len(scored))
    selected: list[ScoredCandidate] = []
    used: set[int] = set()
    while len(selected) < slots:
        best_index = -1
        best_value = -math.inf
        for i, item in enumerate(scored):
            if i in used:
                continue
            redundancy = max(
                (jaccard_similarity(item.tokens, chosen.tokens) for chosen in selected),
                default=0.0,
            )
            value = mmr_lambda * item.score - (1 - mmr_lambda) * redundancy
            if value > best_value:
                best_value = value
                best_index = i
        if best_index == -1:
            break
        used.add(best_index)
        selected.append(scored[best_index])
        if len(selected) >= limit:
            break
    return selected


def score_and_diversify(
    candidates: list[Candidate], profile: SeedProfile, limit: int = LIMIT_FINAL
) -> list[Candidate]:
    selected = mmr_select(score_candidates(candidates, profile), limit=limit)
    logger.debug("MMR picked %d of %d candidates", len(selected), len(candidates))
    return [item.candidate for item in selected]
