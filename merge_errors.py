"""
Errors raised while consolidating delimited files.

All of them are fatal for a run. Each class carries the process exit code the
command line tool terminates with, plus enough context for a readable message.
"""


class MergeError(Exception):
    """Base class for every fatal consolidation error."""
    exit_code = 1


class ConfigurationError(MergeError):
    """Invalid combination of options, detected before reading any data."""
    exit_code = 2


class InconsistentColumnOrdering(ConfigurationError):
    """A negatively indexed shared column was declared before a positive one."""

    def __init__(self, columns, negative, positive):
        self.columns = list(columns)
        self.negative = negative
        self.positive = positive
        super().__init__(
            f"Positively indexed columns must precede negatively indexed columns; "
            f"got {negative} before {positive} in {self.columns}."
        )


class ColumnOutOfRange(MergeError):
    """A shared column does not exist in a record."""
    exit_code = 3

    def __init__(self, column, width, record_id=None):
        self.column = column
        self.width = width
        self.record_id = record_id
        where = f" in {record_id}" if record_id is not None else ""
        super().__init__(
            f"Column {column} is out of bounds{where} (total columns: {width})."
        )


class AmbiguousMatch(MergeError):
    """Several inputs contribute several records to the same key."""
    exit_code = 4

    def __init__(self, key_text, inputs, flag='--multi', names=None):
        self.key_text = key_text
        self.inputs = list(inputs)
        self.flag = flag
        numbers = ', '.join(
            f"#{index + 1} ({names[index]})" if names else f"#{index + 1}" for index in self.inputs
        )
        super().__init__(
            f"There are multiple ways to merge records (inputs {numbers} each hold "
            f"several of them). If this is intended, consider passing the {flag} "
            f"flag. The ambiguous record is:\n{key_text}"
        )


class SingleColumnInput(MergeError):
    """Every input looks single-columned, which usually means a wrong delimiter."""
    exit_code = 5

    def __init__(self, flag='--single'):
        self.flag = flag
        super().__init__(
            "Your data seems not to contain any records with more than one column. "
            f"Did you specify the delimiter correctly? If so, consider passing the {flag} flag."
        )


class SheetFileError(MergeError):
    """A delimited file could not be decoded or parsed."""
    exit_code = 1

    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Could not process {path}: {reason}")
