"""Exception hierarchy for scaffold invocations."""


class ScaffoldError(Exception):
    """Base class for every failure a scaffold invocation can report.

    ``kind`` is the stable name emitted in the ``ERROR=`` field of a
    status line.
    """

    kind = "ScaffoldError"

    @property
    def reason(self):
        return str(self)


class MissingArgument(ScaffoldError):
    kind = "MissingArgument"


class UnexpectedArgument(ScaffoldError):
    kind = "UnexpectedArgument"


class InvalidName(ScaffoldError):
    kind = "InvalidName"


class InvalidEnumValue(ScaffoldError):
    kind = "InvalidEnumValue"


class InvalidValue(ScaffoldError):
    kind = "InvalidValue"


class ConflictingFlags(ScaffoldError):
    kind = "ConflictingFlags"


class UnresolvedPlaceholder(ScaffoldError):
    kind = "UnresolvedPlaceholder"

    def __init__(self, names):
        self.names = tuple(sorted(names))
        super().__init__(f"Unresolved placeholder(s): {', '.join(self.names)}")


class IOFailure(ScaffoldError):
    kind = "IOFailure"
