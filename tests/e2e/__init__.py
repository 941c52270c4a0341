"""End-to-end tests of the ``gigcal`` command line."""
