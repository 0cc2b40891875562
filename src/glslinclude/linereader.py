"""Read a source unit as a sequence of comment free logical lines."""

import codecs
from io import open

from glslinclude.diagnostics import StructuralMismatchError, UnreadableUnitError


class LineReader:
    """Yield (lineno, text) pairs from an open byte stream.

    Comments are removed and every line ends with exactly one newline.
    A block comment that is still open at the end of a physical line swallows
    the following lines up to the closing */ but each physical line still
    produces one (possibly empty) logical line so line numbers stay accurate.
    A block comment still open at the end of the stream is a
    StructuralMismatchError reported at the line that opened it.
    A leading UTF-8 byte order mark is dropped.
    The sequence is lazy and can only be consumed once.
    """

    def __init__(self, stream, filename="<stream>", encoding="utf-8-sig"):
        self.stream = stream
        self.filename = filename
        self.encoding = encoding
        self.in_block_comment = False
        self.block_comment_column = None
        self._lines = self._generate()

    @classmethod
    def open(cls, filename, encoding="utf-8-sig"):
        """Open filename for reading.  Any failure is an UnreadableUnitError."""
        try:
            stream = open(filename, "rb")
        except OSError as err:
            raise UnreadableUnitError(
                f"could not open source unit: {err.strerror or err}", filename
            ) from err
        return cls(stream, filename=filename, encoding=encoding)

    def close(self):
        self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._lines)

    def _generate(self):
        decoder = codecs.getincrementaldecoder(self.encoding)()
        lineno = 0
        opened = None
        try:
            for raw in self.stream:
                lineno += 1
                text = decoder.decode(raw).rstrip("\r\n")
                self.block_comment_column = None
                stripped = self.strip_comments(text)
                if self.in_block_comment and self.block_comment_column is not None:
                    opened = (lineno, text, self.block_comment_column)
                yield lineno, stripped + "\n"
            decoder.decode(b"", final=True)
        except (OSError, UnicodeDecodeError) as err:
            raise UnreadableUnitError(
                f"could not read source unit: {err}", self.filename, lineno
            ) from err

        if self.in_block_comment:
            start_lineno, start_line, column = opened
            raise StructuralMismatchError(
                "unterminated /* comment", self.filename, start_lineno, start_line, column)

    def strip_comments(self, text):
        """Remove // and /* */ comments from a single physical line."""
        pieces = []
        pos = 0
        while pos < len(text):
            if self.in_block_comment:
                end = text.find("*/", pos)
                if end == -1:
                    return "".join(pieces)
                self.in_block_comment = False
                pos = end + 2
                continue

            line_comment = text.find("//", pos)
            block_comment = text.find("/*", pos)
            if line_comment == -1 and block_comment == -1:
                pieces.append(text[pos:])
                break

            if block_comment == -1 or (line_comment != -1 and line_comment < block_comment):
                pieces.append(text[pos:line_comment])
                break

            pieces.append(text[pos:block_comment])
            self.in_block_comment = True
            self.block_comment_column = block_comment
            pos = block_comment + 2

        return "".join(pieces)
