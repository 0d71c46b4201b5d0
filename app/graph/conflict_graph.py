from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Set

from app.models.entities import ConflictSeverity, SchedulingConflict, Task
from app.utils.time_utils import minutes_between


def overlap_minutes(t1: Task, t2: Task) -> int:
    """Whole minutes shared by two bookings; 0 when disjoint or inverted."""
    overlap = minutes_between(max(t1.start_time, t2.start_time), min(t1.end_time, t2.end_time))
    return overlap if overlap > 0 else 0


def conflict_severity(overlap: int) -> ConflictSeverity:
    if overlap <= 15:
        return ConflictSeverity.MINOR
    if overlap <= 60:
        return ConflictSeverity.MAJOR
    return ConflictSeverity.CRITICAL


def find_conflicts(tasks: Sequence[Task]) -> List[SchedulingConflict]:
    """
    Every overlapping pair, largest overlap first.

    Pairs keep input order (task1 precedes task2); equal overlaps keep
    discovery order since the sort is stable.
    """
    conflicts: List[SchedulingConflict] = []
    for i, t1 in enumerate(tasks):
        for t2 in tasks[i + 1 :]:
            overlap = overlap_minutes(t1, t2)
            if overlap > 0:
                conflicts.append(SchedulingConflict(t1, t2, overlap, conflict_severity(overlap)))
    conflicts.sort(key=lambda c: c.overlap_minutes, reverse=True)
    return conflicts


def build_conflict_graph(tasks: Sequence[Task]) -> Dict[str, Set[str]]:
    return graph_from_conflicts(find_conflicts(tasks))


def graph_from_conflicts(conflicts: Iterable[SchedulingConflict]) -> Dict[str, Set[str]]:
    graph: Dict[str, Set[str]] = defaultdict(set)
    for conflict in conflicts:
        graph[conflict.task1.id].add(conflict.task2.id)
        graph[conflict.task2.id].add(conflict.task1.id)
    return graph
