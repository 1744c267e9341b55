from pathlib import Path
from typing import List, Optional
from Bio.SeqRecord import SeqRecord
from nbitk.config import Config
from nbitk.logger import get_formatted_logger
from .constants import DEFAULT_SEPARATOR, NO_COLUMN_INDEX
from .errors import ConfigError
from .formatter import format_fasta
from .parser import ParseOptions, RecordParser
from .table_io import TableIO, decorate_labels, drop_empty_sequences, normalize_text, resolve_separator


class ConversionOrchestrator:
    """
    Main orchestrator for the CSV to FASTA conversion.

    This class coordinates the complete conversion:
    - Reading and normalizing the input text
    - Parsing rows into records
    - Dropping records without a sequence
    - Labelling the headers
    - Rendering FASTA, optionally grouped by clone
    - Writing the output

    The orchestrator is solely responsible for translating configuration
    settings from the CLI into internal variables (ParseOptions and the clone flags).
    If you find yourself fiddling with config options in deeper classes
    this should be considered a major red flag that will impede maintainability.
    """

    def __init__(self, config: Config):
        """
        Initialize the orchestrator.

        :param config: Configuration object containing conversion parameters
        """
        self.config = config
        self.logger = get_formatted_logger(self.__class__.__name__, config)
        self.io = TableIO(config)

    def parse_options(self) -> ParseOptions:
        """
        Translate the configuration into parser options.

        :return: ParseOptions
        :raises ConfigError: If the configuration is inconsistent
        """
        return ParseOptions(
            has_header_row=not self.config.get('no_header', False),
            include_germline=self.config.get('include_germline', False),
            include_clone=self.config.get('include_clone', False),
            header_names=self.config.get('headers', '').split(),
            header_cols=self._header_cols(self.config.get('header_cols', str(NO_COLUMN_INDEX))),
            seq_name=self.config.get('seqs', ''),
            seq_col=self.config.get('seqs_col', 1),
            germ_name=self.config.get('germline', ''),
            germ_col=self.config.get('germline_col', 1),
            clone_name=self.config.get('clone', ''),
            clone_col=self.config.get('clone_col', 1),
            delimiter=resolve_separator(self.config.get('sep', DEFAULT_SEPARATOR))
        )

    @staticmethod
    def _header_cols(value: str) -> List[int]:
        """Split a space-separated list of column numbers."""
        try:
            return [int(token) for token in value.split()]
        except ValueError:
            raise ConfigError(f"Header columns must be integers separated by a space, got '{value}'")

    def convert_text(self, text: str) -> str:
        """
        Convert delimited text into FASTA text.

        :param text: Raw input text
        :return: FASTA text
        """
        options = self.parse_options()
        records = self.convert_records(text, options)
        return format_fasta(self.config.get('include_clone', False),
                            not self.config.get('clone_no_sort', False),
                            records)

    def convert_records(self, text: str, options: ParseOptions) -> List[SeqRecord]:
        """
        Parse, filter and label the records of the input text.

        :param text: Raw input text
        :param options: Parser options
        :return: Records ready to be rendered
        """
        parsed = RecordParser(options, self.config).parse(normalize_text(text))
        records = drop_empty_sequences(parsed)
        if len(records) < len(parsed):
            self.logger.info(f"Dropped {len(parsed) - len(records)} record(s) with an empty sequence")
        return decorate_labels(records, self.config.get('label', ''))

    def convert_file(self, input_path: Optional[Path] = None, output_path: Optional[Path] = None) -> str:
        """
        Convert an input file (or stdin) to a FASTA file (or stdout). Nothing is
        written unless the complete conversion succeeds.

        :param input_path: Path to the input file, None for standard input
        :param output_path: Path to the output file, None for standard output
        :return: The FASTA text that was written
        """
        text = self.io.read_text(input_path)
        fasta = self.convert_text(text)
        self.io.write_text(fasta, output_path)
        return fasta
