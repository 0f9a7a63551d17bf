"""Link aggregation module for combining duplicate flows.

This module merges provisional links that share the same ordered
(source, target) pair into a single link whose value is the sum of the
contributing values. Reversed pairs (A->B and B->A) stay distinct.

Key features:
- Composite tuple key, so adjacent labels can never collide
- First-appearance ordering of the aggregated links
- Configurable handling of differing identifiers on merged links
"""

from typing import Literal

from sankeyflow.schema import FlowLink

# How to resolve identifiers when several rows collapse into one link
IdMergePolicy = Literal["first", "last", "drop"]


def aggregate_links(
    links: list[FlowLink],
    id_policy: IdMergePolicy = "first",
) -> list[FlowLink]:
    """Merge links with the same (source, target) pair by summing values.

    No validation is performed: the input is assumed to have passed
    ingestion filtering. The input links are not modified.

    Identifier policies when merged links carry differing identifiers:
    - "first": the first non-empty identifier encountered wins
    - "last": the last non-empty identifier encountered wins
    - "drop": the merged link carries no identifier

    Args:
        links: Provisional links, possibly with repeated pairs.
        id_policy: Identifier merge policy. Defaults to "first".

    Returns:
        One link per distinct (source, target) pair, ordered by first
        appearance of the pair.

    Raises:
        ValueError: If id_policy is not a known policy.

    Example:
        >>> merged = aggregate_links([
        ...     FlowLink(source="A", target="B", value=10),
        ...     FlowLink(source="A", target="B", value=5),
        ... ])
        >>> merged[0].value
        15.0
    """
    if id_policy not in ("first", "last", "drop"):
        raise ValueError(f"Unsupported id merge policy: {id_policy}")

    totals: dict[tuple[str, str], float] = {}
    ids: dict[tuple[str, str], str | None] = {}
    conflicted: set[tuple[str, str]] = set()

    for link in links:
        key = (link.source, link.target)

        if key not in totals:
            totals[key] = link.value
            ids[key] = link.id
            continue

        totals[key] += link.value

        if link.id is None:
            continue
        current = ids[key]
        if current is None:
            ids[key] = link.id
        elif current != link.id:
            conflicted.add(key)
            if id_policy == "last":
                ids[key] = link.id

    return [
        FlowLink(
            source=source,
            target=target,
            value=total,
            id=None if id_policy == "drop" and (source, target) in conflicted else ids[(source, target)],
        )
        for (source, target), total in totals.items()
    ]
