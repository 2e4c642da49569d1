import sys


class OutputWriter:
    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def write_title(self, title, url):
        """Print one "<title> (<url>)" line; an empty title still prints."""
        self.stream.write(f"{title} ({url})\n")
        self.stream.flush()
