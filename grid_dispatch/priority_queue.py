"""
Incident priority queue — an array-backed binary max-heap.

Priority is severity * 10 + waiting time, frozen when the incident is
inserted. Equal priorities come out in no particular order.
"""

from dataclasses import dataclass, field
from typing import Optional

SEVERITY_WEIGHT = 10


@dataclass
class Incident:
    """A single reported emergency."""
    id: str
    severity: int
    waiting_time: int
    location: tuple[int, int]  # (row, col)
    priority: int = field(init=False)

    def __post_init__(self):
        self.priority = self.severity * SEVERITY_WEIGHT + self.waiting_time

    def to_dict(self) -> dict:
        row, col = self.location
        return {
            "callId": self.id,
            "severity": self.severity,
            "waitingTime": self.waiting_time,
            "location": {"r": row, "c": col},
            "priority": self.priority,
        }


class IncidentQueue:
    """Max-heap of incidents keyed on ``priority``."""

    def __init__(self):
        self.heap: list[Incident] = []

    def __len__(self) -> int:
        return len(self.heap)

    def insert(self, incident_id: str, severity: int, waiting_time: int,
               location: tuple[int, int]) -> Incident:
        incident = Incident(incident_id, severity, waiting_time, tuple(location))
        self.heap.append(incident)
        self._sift_up(len(self.heap) - 1)
        return incident

    def extract_max(self) -> Optional[Incident]:
        """Remove and return the top incident, or None if the queue is empty."""
        if not self.heap:
            return None
        top = self.heap[0]
        last = self.heap.pop()
        if self.heap:
            self.heap[0] = last
            self._sift_down(0)
        return top

    def peek(self) -> Optional[Incident]:
        return self.heap[0] if self.heap else None

    def snapshot(self) -> list[Incident]:
        """Priority-descending copy; the heap array itself is left untouched."""
        return sorted(self.heap, key=lambda inc: inc.priority, reverse=True)

    def clear(self):
        self.heap.clear()

    def _sift_up(self, index: int):
        heap = self.heap
        while index > 0:
            parent = (index - 1) // 2
            if heap[parent].priority >= heap[index].priority:
                break
            heap[parent], heap[index] = heap[index], heap[parent]
            index = parent

    def _sift_down(self, index: int):
        heap = self.heap
        length = len(heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            largest = index
            if left < length and heap[left].priority > heap[largest].priority:
                largest = left
            if right < length and heap[right].priority > heap[largest].priority:
                largest = right
            if largest == index:
                return
            heap[index], heap[largest] = heap[largest], heap[index]
            index = largest

    def format_heap(self) -> str:
        """Render the raw heap array, in array order, as a table."""
        lines = [
            "EMERGENCY CALL HEAP (MAX HEAP)",
            "Index | CallID | Severity | Priority",
            "-" * 37,
        ]
        for index, inc in enumerate(self.heap):
            lines.append(f"{index:<5} | {inc.id:<6} | {inc.severity:<8} | {inc.priority}")
        return "\n".join(lines)
