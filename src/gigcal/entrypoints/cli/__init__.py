"""The ``gigcal`` command-line interface."""
