# core/utilities/archive_codec.py
"""Zstandard codec for the comic archive (compress a file, stream lines back)."""
import io
import logging
import zstandard as zstd
from pathlib import Path
from typing import Iterator, Optional, Iterable

logger = logging.getLogger(__name__)

class CodecError(IOError):
    """Raised when the archive can't be compressed or decompressed."""
    pass

class ZstCodec:
    """Stream-compresses JSON lines with Zstandard."""

    def __init__(self, level: int = 10):
        """Initialize codec.

        Args:
            level: Zstandard compression level (1-22)
        """
        self.level = level
        self.chunk_size = 1024 * 1024  # 1MB chunks for streaming

    def compress_file(self, input_path: Path, output_path: Path) -> int:
        """Compress a file into a .zst archive.

        Writes to a temp file first, then moves into place on success.

        Returns:
            Size of the compressed archive in bytes

        Raises:
            FileNotFoundError: If the input file is missing
            CodecError: If compression fails
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        if not input_path.exists():
            raise FileNotFoundError(f"File to compress not found: {input_path}")

        temp_path = output_path.with_suffix('.tmp')
        cctx = zstd.ZstdCompressor(level=self.level)
        try:
            with open(input_path, 'rb') as source, open(temp_path, 'wb') as output:
                cctx.copy_stream(source, output, read_size=self.chunk_size)
            temp_path.replace(output_path)
        except (OSError, zstd.ZstdError) as e:
            temp_path.unlink(missing_ok=True)
            raise CodecError(f"Failed to compress {input_path.name}: {e}") from e

        size = output_path.stat().st_size
        logger.info("Compressed %s -> %s (%d bytes)", input_path.name, output_path.name, size)
        return size

    def write_lines(self, lines: Iterable[str], output_path: Path) -> int:
        """Compress text lines straight into an archive. Returns the line count."""
        output_path = Path(output_path)
        temp_path = output_path.with_suffix('.tmp')
        cctx = zstd.ZstdCompressor(level=self.level)
        count = 0
        try:
            with open(temp_path, 'wb') as raw:
                with cctx.stream_writer(raw) as writer:
                    for line in lines:
                        writer.write(line.encode('utf-8') + b"\n")
                        count += 1
            temp_path.replace(output_path)
        except (OSError, zstd.ZstdError) as e:
            temp_path.unlink(missing_ok=True)
            raise CodecError(f"Failed to write {output_path.name}: {e}") from e
        return count

    def read_lines(self, input_path: Path, limit: Optional[int] = None) -> Iterator[str]:
        """Yield decoded text lines from an archive.

        Args:
            input_path: Path to the .zst archive
            limit: Stop after this many lines

        Raises:
            FileNotFoundError: If the archive is missing
            CodecError: If the stream is corrupt
        """
        input_path = Path(input_path)
        if not input_path.exists():
            raise FileNotFoundError(f"Archive not found: {input_path}")

        dctx = zstd.ZstdDecompressor()
        read = 0
        try:
            with open(input_path, 'rb') as compressed:
                with dctx.stream_reader(compressed) as reader:
                    text = io.TextIOWrapper(reader, encoding='utf-8')
                    for line in text:
                        if limit is not None and read >= limit:
                            break
                        read += 1
                        yield line.rstrip("\n")
        except (zstd.ZstdError, UnicodeDecodeError) as e:
            raise CodecError(f"Corrupt archive {input_path.name}: {e}") from e
