# core/interval.py
class TimeInterval:
    """
    Open range (min, max) of acceptable ray parameters for a hit query.
    """
    def __init__(self, min: float, max: float):
        self.min = min
        self.max = max

    def surrounds(self, t: float) -> bool:
        return self.min < t < self.max

    def clamp_max(self, t: float) -> "TimeInterval":
        """Returns a copy whose upper bound is tightened to t."""
        return TimeInterval(self.min, t)

    def __repr__(self) -> str:
        return f"TimeInterval({self.min}, {self.max})"
