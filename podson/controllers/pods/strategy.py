"""Query strategy selection.

There is no exact formula for the faster strategy: it depends on the number
of pods in the cluster (unknown until they are listed), the worker count and
the API server's priority and fairness settings. Measurements on real
clusters:

* 200 nodes, 4000 pods
  * 100 nodes matched: all pods 5s, by node (20 workers) 10s
  * 16 nodes matched: all pods 3s, by node (20 workers) 1.5s
* 1000 nodes, 16000 pods
  * 850 nodes matched: all pods 20s, by node (20 workers) 87s
  * 57 nodes matched: all pods 22s, by node (20 workers) 9s
"""

from __future__ import annotations

import logging

from podson.constants.defaults import BY_NODE_RATIO_THRESHOLD
from podson.constants.enums import QueryStrategy

logger = logging.getLogger(__name__)


def choose_strategy(total_nodes: int, matched_nodes: int) -> QueryStrategy:
    """Pick a strategy from the cluster size and the number of matched nodes.

    ``total_nodes`` is 0 when no selector was resolved, i.e. the caller only
    named nodes explicitly; such lists are short, so nodes are queried one by
    one. Otherwise nodes are queried one by one while fewer than a quarter of
    the cluster matched, and all pods are listed at or above that share.
    """
    if total_nodes <= 0:
        return QueryStrategy.BY_NODE

    ratio = matched_nodes / total_nodes
    if ratio < BY_NODE_RATIO_THRESHOLD:
        return QueryStrategy.BY_NODE

    logger.warning(
        "query matched %d nodes, querying all pods in the cluster (it may be slow)",
        matched_nodes,
    )
    return QueryStrategy.ALL_PODS
