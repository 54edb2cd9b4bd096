from __future__ import annotations

from typing import Sequence, TypeVar

from textdiff.diff_types import Operation

T = TypeVar("T")

Frontier = dict[int, int]


def _prefers_deletion(frontier: Frontier, diagonal: int) -> bool:
    """
    Pick the predecessor of an interior diagonal while exploring: the
    deletion from diagonal-1 wins unless the insertion from diagonal+1
    reaches strictly further.
    """
    delete_x = frontier.get(diagonal - 1, -1) + 1
    insert_x = frontier.get(diagonal + 1, -1)
    return delete_x >= insert_x


def _came_from_deletion(frontier: Frontier, diagonal: int) -> bool:
    """
    Pick the predecessor of an interior diagonal while backtracking: the
    deletion diagonal wins unless the insertion diagonal had advanced further.
    Walking backwards this places a deletion before the insertion it pairs with.
    """
    return frontier.get(diagonal - 1, -1) >= frontier.get(diagonal + 1, -1)


def diff(original: Sequence[T], updated: Sequence[T]) -> list[Operation[T]]:
    """
    Myers shortest edit script between two sequences of comparable items.

    Returns one operation per item in document order: equal and delete
    operations follow `original`, insert operations sit where they occur
    in `updated`. When several minimal scripts exist the one preferring
    deletions over insertions is returned.
    """
    original_count = len(original)
    updated_count = len(updated)

    if original_count == 0:
        return [Operation(kind="insert", item=item) for item in updated]
    if updated_count == 0:
        return [Operation(kind="delete", item=item) for item in original]

    frontier: Frontier = {1: 0}
    trace: list[Frontier] = [frontier]

    for distance in range(original_count + updated_count + 1):
        next_frontier: Frontier = {}

        for diagonal in range(-distance, distance + 1, 2):
            if diagonal == -distance:
                x = frontier.get(diagonal + 1, 0)
            elif diagonal == distance:
                x = frontier.get(diagonal - 1, -1) + 1
            elif _prefers_deletion(frontier, diagonal):
                x = frontier.get(diagonal - 1, -1) + 1
            else:
                x = frontier.get(diagonal + 1, -1)

            y = x - diagonal
            while x < original_count and y < updated_count and original[x] == updated[y]:
                x += 1
                y += 1

            next_frontier[diagonal] = x

            if x >= original_count and y >= updated_count:
                trace.append(next_frontier)
                return _backtrack(trace, distance, original, updated)

        frontier = next_frontier
        trace.append(frontier)

    # Unreachable: distance original_count + updated_count always reaches the end.
    return []


def _backtrack(
    trace: list[Frontier],
    final_distance: int,
    original: Sequence[T],
    updated: Sequence[T],
) -> list[Operation[T]]:
    x = len(original)
    y = len(updated)
    operations: list[Operation[T]] = []

    # trace[d] holds the frontier as it stood before round d was explored.
    for distance in range(final_distance, 0, -1):
        previous = trace[distance]
        diagonal = x - y

        if diagonal == -distance:
            previous_diagonal = diagonal + 1
        elif diagonal == distance:
            previous_diagonal = diagonal - 1
        elif _came_from_deletion(previous, diagonal):
            previous_diagonal = diagonal - 1
        else:
            previous_diagonal = diagonal + 1

        previous_x = previous.get(previous_diagonal, 0)
        previous_y = previous_x - previous_diagonal

        while x > previous_x and y > previous_y:
            x -= 1
            y -= 1
            operations.append(Operation(kind="equal", item=original[x]))

        if x == previous_x:
            y -= 1
            operations.append(Operation(kind="insert", item=updated[y]))
        else:
            x -= 1
            operations.append(Operation(kind="delete", item=original[x]))

    while x > 0 and y > 0:
        x -= 1
        y -= 1
        operations.append(Operation(kind="equal", item=original[x]))
    while x > 0:
        x -= 1
        operations.append(Operation(kind="delete", item=original[x]))
    while y > 0:
        y -= 1
        operations.append(Operation(kind="insert", item=updated[y]))

    operations.reverse()
    return operations


def edit_distance(operations: Sequence[Operation[T]]) -> int:
    return sum(1 for op in operations if op.kind != "equal")
