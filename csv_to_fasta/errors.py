class CsvToFastaError(Exception):
    """Base class for all errors raised while converting a table to FASTA."""
    pass


class ConfigError(CsvToFastaError):
    """Raised when the conversion options are invalid or incomplete."""
    pass


class ColumnNotFoundError(CsvToFastaError):
    """Raised when a named column is requested but absent from the header row."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Column '{column}' not found in header row")


class RowTooShortError(CsvToFastaError):
    """Raised when a data row lacks a field at a required column index."""

    def __init__(self, line_number: int, index: int, n_fields: int):
        self.line_number = line_number
        self.index = index
        self.n_fields = n_fields
        super().__init__(f"Line {line_number} has {n_fields} field(s), "
                         f"but column {index + 1} is required")
