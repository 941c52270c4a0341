"""Entry points: the Python API facade and the ``gigcal`` CLI."""
