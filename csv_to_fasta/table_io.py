import sys
from pathlib import Path
from typing import List, Optional, Union
from Bio.SeqRecord import SeqRecord
from nbitk.config import Config
from nbitk.logger import get_formatted_logger
from .constants import LABEL_SEPARATOR, TAB_TOKEN


def normalize_text(text: str) -> str:
    """
    Turn carriage returns into newlines and remove empty lines. Every remaining
    line is terminated by a newline. Applying this twice gives the same result.

    :param text: Raw input text
    :return: Normalized text
    """
    lines = text.replace("\r", "\n").split("\n")
    return "".join(f"{line}\n" for line in lines if line)


def resolve_separator(token: str) -> str:
    """Map the literal two-character token \\t to a tab character."""
    if token == TAB_TOKEN:
        return "\t"
    return token


def drop_empty_sequences(records: List[SeqRecord]) -> List[SeqRecord]:
    """Discard records with an empty sequence."""
    return [record for record in records if len(record.seq) > 0]


def decorate_labels(records: List[SeqRecord], label: str) -> List[SeqRecord]:
    """
    Prefix every header with a label, joined by a pipe. Records are updated in place.

    :param records: Parsed records
    :param label: Label to prefix; an empty label leaves the records untouched
    :return: The same records
    """
    if not label:
        return records
    for record in records:
        record.id = f"{label}{LABEL_SEPARATOR}{record.id}"
        record.name = record.id
    return records


class TableIO:
    """
    Handle the file I/O of the converter.

    Input is read in one go from a file or from standard input, output is
    written in one go to a file or to standard output. An empty or missing
    path selects the standard stream.

    Examples:
        >>> from csv_to_fasta.config.schema_config import SchemaConfig
        >>> io = TableIO(SchemaConfig())
        >>> text = io.read_text('clones.csv')
    """

    def __init__(self, config: Config):
        """Initialize with configuration."""
        self.config = config
        self.logger = get_formatted_logger(self.__class__.__name__, config)

    def read_text(self, path: Optional[Union[str, Path]] = None) -> str:
        """
        Read the complete input text.

        :param path: Path to the input file, or empty for standard input
        :return: Input text
        """
        if not path:
            self.logger.info("Reading input from stdin")
            return sys.stdin.read()
        self.logger.info(f"Reading input from {path}")
        with open(path, encoding='utf-8') as handle:
            return handle.read()

    def write_text(self, text: str, path: Optional[Union[str, Path]] = None) -> None:
        """
        Write the complete output text.

        :param text: Output text
        :param path: Path to the output file, or empty for standard output
        """
        if not path:
            self.logger.info("Writing output to stdout")
            sys.stdout.write(text)
            sys.stdout.flush()
            return
        self.logger.info(f"Writing output to {path}")
        with open(path, 'w', encoding='utf-8') as handle:
            handle.write(text)
