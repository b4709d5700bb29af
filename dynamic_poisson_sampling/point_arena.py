"""
point_arena.py
--------------
Storage for accepted points and the active list of points that may still
spawn candidates.

The arena owns every Point; the active list and the spatial grid only keep
integer indices into it. Indices stay valid for the whole run (append only,
no removal).
"""

from collections import namedtuple

# position: tuple of N floats, radius: exclusion radius (> 0)
Point = namedtuple("Point", ["position", "radius"])


class PointArena:
    """
    Append-only list of accepted points.
    """

    def __init__(self):
        self._points = []

    def append(self, point):
        """
        Stores `point` and returns its index.
        """
        self._points.append(point)
        return len(self._points) - 1

    def __getitem__(self, index):
        return self._points[index]

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def positions(self):
        return [p.position for p in self._points]


class ActiveList:
    """
    Arena indices still eligible to spawn candidates.

    Picking is uniform over slots; removal swaps the last entry into the freed
    slot, so slot order carries no meaning.
    """

    def __init__(self):
        self._indices = []

    def push(self, index):
        self._indices.append(index)

    def pick(self, rng):
        """
        Picks a uniformly random slot.

        Args:
            rng (RandomSource): Source of the index pick.

        Returns:
            int: Slot number, valid until the next `remove`.
        """
        return rng.randrange(len(self._indices))

    def entry(self, slot):
        return self._indices[slot]

    def remove(self, slot):
        last = self._indices.pop()
        if slot < len(self._indices):
            self._indices[slot] = last

    def __len__(self):
        return len(self._indices)

    def __bool__(self):
        return bool(self._indices)

    def __contains__(self, index):
        return index in self._indices
