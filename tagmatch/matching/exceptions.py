"""Matching engine exceptions.

Only internal-consistency violations are raised. Problems with game data
(a malformed date, a missing tag, a regex that does not compile) are not
errors: they resolve to "does not match".
"""


class FatalMatchError(Exception):
    """Base exception for broken engine invariants.

    These are programming or configuration contract violations. The engine
    never catches them; callers are expected to stop processing.
    """

    pass


class TagTableShrinkError(FatalMatchError):
    """Raised when the criteria table is asked to become shorter."""

    def __init__(self, new_length: int, current_length: int) -> None:
        super().__init__(
            f"New length of {new_length} is not greater than existing length "
            f"of {current_length}"
        )
        self.new_length = new_length
        self.current_length = current_length


class FieldCountMismatchError(FatalMatchError):
    """Raised when a game's field array is shorter than the criteria table."""

    def __init__(self, field_count: int, table_length: int) -> None:
        super().__init__(
            f"Mismatch in tag set lengths: {field_count} fields vs {table_length} tags"
        )
        self.field_count = field_count
        self.table_length = table_length


class UnknownTagSelectorError(FatalMatchError):
    """Raised for a shorthand criterion whose selector letter is unknown."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"Unknown type of tag extraction argument: {argument}")
        self.argument = argument


class UnknownSetupStatusError(FatalMatchError):
    """Raised when the SetUp acceptance rule is not a SetupStatus."""

    def __init__(self, status) -> None:
        super().__init__(f"Setup status {status!r} not recognised")
        self.status = status
