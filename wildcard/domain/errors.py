"""Input errors raised while turning user input into a score entry."""


class ScoreInputError(ValueError):
    """Base class for problems the submitter has to fix and resubmit."""


class ScoreParseError(ScoreInputError):
    """The input could not be read as ``Name: score`` pairs."""

    def __init__(self, message: str = "Invalid score format"):
        super().__init__(message)


class ScoreSumError(ScoreInputError):
    """The scores do not add up to zero."""

    def __init__(self, total: int):
        self.total = total
        super().__init__(f"Invalid scores! Sum must equal 0. Current sum: {total}")
