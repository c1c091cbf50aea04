"""
scoring.py

Ranks candidate guesses in parallel.

The search list is cut into contiguous shards, one per worker process. The
knowledge state and the answer list are handed to every worker once through
the pool initializer, each shard is scored independently, and the pool is
torn down before score_guesses returns.
"""

import multiprocessing as mp
import os

from .entropy import Ranking, Win, score_shard, sort_scores


_WORKER_STATE = {}


def _init_worker(state, dictionary, progress):
    _WORKER_STATE["state"] = state
    _WORKER_STATE["dictionary"] = dictionary
    _WORKER_STATE["progress"] = progress


def _worker_shard(task):
    position, search = task
    return score_shard(
        _WORKER_STATE["state"],
        search,
        _WORKER_STATE["dictionary"],
        progress=_WORKER_STATE["progress"],
        position=position,
    )


def shard_bounds(n_items, workers):
    """
    Split range(n_items) into `workers` contiguous (start, end) slices.

    Every shard gets n_items // workers items and the last one also takes
    the remainder.
    """
    workers = max(1, int(workers))
    size = n_items // workers
    bounds = [(size * i, size * (i + 1)) for i in range(workers - 1)]
    bounds.append((size * (workers - 1), n_items))
    return bounds


def combine_results(results):
    """Report the first Win in shard order, else merge and re-sort the scores."""
    scores = []
    for result in results:
        if isinstance(result, Win):
            return result
        scores.extend(result.scores)
    return Ranking(sort_scores(scores))


def score_guesses(state, search, dictionary, workers=None, progress=False):
    """
    Rank every word in `search` by expected information over the words of
    `dictionary` that still fit `state`.

    Returns a Win when some guess is certain to be the answer, otherwise a
    Ranking sorted best first. An exception raised in any shard propagates.
    """
    search = list(search)
    dictionary = list(dictionary)
    worker_count = workers if workers is not None else (os.cpu_count() or 1)
    worker_count = max(1, int(worker_count))

    tasks = [
        (position, search[start:end])
        for position, (start, end) in enumerate(shard_bounds(len(search), worker_count))
        if end > start
    ]

    if len(tasks) <= 1:
        results = [
            score_shard(state, shard, dictionary, progress=progress, position=position)
            for position, shard in tasks
        ]
        return combine_results(results)

    start_methods = mp.get_all_start_methods()
    start_method = "fork" if "fork" in start_methods else "spawn"
    ctx = mp.get_context(start_method)

    with ctx.Pool(
        processes=len(tasks),
        initializer=_init_worker,
        initargs=(state, dictionary, progress),
    ) as pool:
        results = pool.map(_worker_shard, tasks, chunksize=1)

    return combine_results(results)
