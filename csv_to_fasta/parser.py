from typing import List, Optional
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord
from nbitk.config import Config
from nbitk.logger import get_formatted_logger
from .columns import ColumnRef, NoColumn, column_ref, header_column_refs
from .constants import DEFAULT_SEPARATOR
from .errors import ConfigError, RowTooShortError


def default_config() -> Config:
    """Minimal configuration for callers that do not bring their own."""
    config = Config()
    config.config_data = {'log_level': 'WARNING'}
    config.initialized = True
    return config


class ParseOptions:
    """
    Column selection and formatting options for the RecordParser.

    Examples:
        >>> opts = ParseOptions(header_names=['id', 'region'], seq_name='seq')
        >>> opts.sequence
        ByName('seq')
    """

    def __init__(self,
                 has_header_row: bool = True,
                 include_germline: bool = False,
                 include_clone: bool = False,
                 header_names: Optional[List[str]] = None,
                 header_cols: Optional[List[int]] = None,
                 seq_name: str = "",
                 seq_col: int = 1,
                 germ_name: str = "",
                 germ_col: int = 1,
                 clone_name: str = "",
                 clone_col: int = 1,
                 delimiter: str = DEFAULT_SEPARATOR):
        if not delimiter:
            raise ConfigError("The delimiter must not be empty")
        if include_clone and not include_germline:
            raise ConfigError("Including the clone requires including the germline")

        self.has_header_row = has_header_row
        self.include_germline = include_germline
        self.include_clone = include_clone
        self.delimiter = delimiter

        self.headers: List[ColumnRef] = header_column_refs(header_names or [], header_cols or [], has_header_row)
        self.sequence: ColumnRef = column_ref(seq_name, seq_col, has_header_row)
        self.germline: ColumnRef = column_ref(germ_name, germ_col, has_header_row) \
            if include_germline else NoColumn()
        self.clone: ColumnRef = column_ref(clone_name, clone_col, has_header_row) \
            if include_clone else NoColumn()


class RecordParser:
    """
    Turn delimited text into SeqRecord objects.

    Each data line becomes one record. The record ID is the header: the values
    of the header columns, then the germline and the clone value if requested,
    joined by the delimiter. The raw germline and clone values are kept in
    record.annotations['csv_fields'] so that clones can be grouped later on.
    """

    def __init__(self, options: ParseOptions, config: Config = None):
        self.options = options
        self.config = config if config is not None else default_config()
        self.logger = get_formatted_logger(self.__class__.__name__, self.config)

    def parse(self, text: str) -> List[SeqRecord]:
        """
        Parse delimited text into records, preserving input order.

        :param text: Delimited text, one row per line
        :return: List of SeqRecord objects
        :raises ColumnNotFoundError: If a named column is not in the header row
        :raises RowTooShortError: If a data row lacks a required field
        """
        opts = self.options
        lines = [(number, line) for number, line in enumerate(text.split("\n"), start=1) if line]
        if not lines:
            self.logger.warning("Input contains no rows")
            return []

        header_row = None
        if opts.has_header_row:
            header_row = lines[0][1].split(opts.delimiter)
            lines = lines[1:]

        header_idx = [ref.resolve(header_row) for ref in opts.headers]
        seq_idx = opts.sequence.resolve(header_row)
        germ_idx = opts.germline.resolve(header_row)
        clone_idx = opts.clone.resolve(header_row)
        self.logger.debug(f"Resolved columns: headers={header_idx}, sequence={seq_idx}, "
                          f"germline={germ_idx}, clone={clone_idx}")

        records = []
        for number, line in lines:
            fields = line.split(opts.delimiter)

            segments = [self._field(fields, i, number) for i in header_idx]
            germline = None
            clone = None
            if germ_idx is not None:
                germline = self._field(fields, germ_idx, number)
                segments.append(germline)
            if clone_idx is not None:
                clone = self._field(fields, clone_idx, number)
                segments.append(clone)
            header = opts.delimiter.join(segments)

            record = SeqRecord(
                seq=Seq(self._field(fields, seq_idx, number)),
                id=header,
                name=header,
                description=""
            )
            record.annotations['csv_fields'] = {
                'germline': germline,
                'clone': clone
            }
            records.append(record)

        self.logger.info(f"Parsed {len(records)} record(s)")
        return records

    @staticmethod
    def _field(fields: List[str], index: int, line_number: int) -> str:
        if index >= len(fields):
            raise RowTooShortError(line_number, index, len(fields))
        return fields[index]


def parse_csv(has_header_row: bool, include_germline: bool, include_clone: bool,
              header_names: List[str], header_cols: List[int],
              seq_name: str, seq_col: int,
              germ_name: str, germ_col: int,
              clone_name: str, clone_col: int,
              delimiter: str, text: str, config: Config = None) -> List[SeqRecord]:
    """
    Parse delimited text into an ordered list of records.

    :return: List of SeqRecord objects, one per data line
    """
    options = ParseOptions(
        has_header_row=has_header_row,
        include_germline=include_germline,
        include_clone=include_clone,
        header_names=header_names,
        header_cols=header_cols,
        seq_name=seq_name,
        seq_col=seq_col,
        germ_name=germ_name,
        germ_col=germ_col,
        clone_name=clone_name,
        clone_col=clone_col,
        delimiter=delimiter
    )
    return RecordParser(options, config).parse(text)
