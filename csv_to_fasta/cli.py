import argparse
import sys
import logging
import traceback
from nbitk.logger import get_formatted_logger

from .orchestrator import ConversionOrchestrator
from csv_to_fasta.config.schema_config import SchemaConfig


class CsvToFastaCLI:
    """
    Command Line Interface for the CSV to FASTA converter.

    This class exposes the functionality of the csv_to_fasta package to the command line.
    The overall program flow is as follows:
    1. Initialize schema-driven configuration
    2. Parse command line arguments using schema-generated parser
    3. Update and validate configuration with command line arguments
    4. Instantiate the orchestrator with the loaded configuration
    5. Convert the input (file or stdin) and write the FASTA (file or stdout)
    """

    def __init__(self) -> None:
        """Initialize the CsvToFastaCLI."""
        self.config: SchemaConfig = SchemaConfig()
        self.args: argparse.Namespace = self.parse_args()
        self.logger: logging.Logger = get_formatted_logger(__name__, self.config)
        self.logger.info("Starting csv-to-fasta")

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create and configure the argument parser using the schema.

        :return: Configured ArgumentParser
        """
        parser = argparse.ArgumentParser(
            prog="csv-to-fasta",
            description="""Convert a csv file to a fasta file

Each row of the csv becomes one fasta entry. The sequence is taken from a single
column, the header is made of the selected header columns joined by the csv
delimiter. Columns are selected by name (using the header row) or by 1-based
number; names have preference over numbers.

Optionally, the germline and the clone ID are appended to the header. With
--include-clone, entries are grouped by clone and every group starts with its
germline sequence. Rows with an empty sequence are dropped.
""",
            formatter_class=argparse.RawTextHelpFormatter
        )

        # Let the schema populate the parser
        self.config.populate_argparse(parser)

        return parser

    def parse_args(self) -> argparse.Namespace:
        """
        Parse command line arguments using schema-generated parser.

        :return: Parsed command line arguments.
        """
        parser = self.create_parser()
        args = parser.parse_args()

        # Update configuration with parsed arguments
        try:
            self.config.update_from_args(args)
        except Exception as e:
            parser.error(f"Configuration validation failed: {e}")

        return args

    def run(self) -> str:
        """Run the conversion."""
        try:
            orchestrator = ConversionOrchestrator(self.config)
            return orchestrator.convert_file(
                self.config.get('input'),
                self.config.get('output')
            )

        except Exception as e:
            self.logger.error(f"Conversion failed: {e}")
            stack_trace = traceback.format_exc()
            self.logger.debug(stack_trace)
            sys.exit(1)


def main():
    """Main entry point for the CLI."""
    cli = CsvToFastaCLI()
    cli.run()


if __name__ == "__main__":
    main()
