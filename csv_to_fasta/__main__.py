#!/usr/bin/env python
"""
csv_to_fasta

A command line tool that converts a csv file to a fasta file.

This tool reads delimited text from a file or standard input, takes the sequence
from one column and builds the header from other columns, optionally groups the
entries by clone with the germline first, and writes FASTA to a file or standard
output.
"""
from csv_to_fasta.cli import main

if __name__ == "__main__":
    main()
