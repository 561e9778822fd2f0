"""
AI Productivity ROI: Engine Errors
"""


class InvalidInput(ValueError):
    """A numeric assumption is missing, non-finite or outside its domain."""

    def __init__(self, field, message):
        self.field = field
        super().__init__(f"{field}: {message}")


class InvalidMaturityLevel(InvalidInput):
    def __init__(self, level):
        self.level = level
        super().__init__('maturityLevel', f"expected an integer in [1, 10], got {level!r}")
