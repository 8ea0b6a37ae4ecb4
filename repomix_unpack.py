#!/usr/bin/env python3
"""
Repomix Unpack - restore a directory tree from a Repomix output file

Repomix bundles a repository into a single "merged representation" text
file. This module reverses that: it parses the Files section back into
individual entries and writes them under an output directory.

Features:
- Streaming parser, the input is never buffered whole
- Async orchestration with blocking filesystem work in a thread pool
- Memoized directory creation (one existence check per directory per run)
- Per-entry error isolation, dry runs and optional empty-directory cleanup
"""

import argparse
import asyncio
import functools
import logging
import os
import re
import sys
import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union


# Async helper for running blocking I/O in thread pool
async def run_in_thread(func: Callable[..., Any], *args, **kwargs) -> Any:
    """Run a blocking function in a thread pool.

    Uses asyncio.to_thread() for Python 3.9+,
    falls back to run_in_executor() for Python 3.8.
    """
    if sys.version_info >= (3, 9):
        return await asyncio.to_thread(func, *args, **kwargs)
    else:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            None, functools.partial(func, *args, **kwargs)
        )


try:
    from rich.console import Console
    from rich.progress import (
        Progress,
        SpinnerColumn,
        TextColumn,
        BarColumn,
        TimeElapsedColumn,
        MofNCompleteColumn,
    )

    HAS_RICH = True
except ImportError:
    HAS_RICH = False
    Console = None
    Progress = None

try:
    from tqdm import tqdm

    HAS_TQDM = True
except ImportError:
    HAS_TQDM = False
    tqdm = None


__version__ = "1.0.0"
__author__ = "Repomix Unpack Project"
__license__ = "MIT"

LOGGER_NAME = "repomix_unpack"
DEFAULT_OUTPUT_DIR = "./repomix-extracted"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "repomix-unpack" / "config"

PathLike = Union[str, Path]


@dataclass
class FileEntry:
    """One file recovered from the Files section"""

    path: str
    content: str = ""


@dataclass
class ParseProgress:
    """Snapshot handed to parse progress callbacks"""

    current_line: int
    current_file: Optional[str] = None


@dataclass
class ValidationResult:
    """Outcome of an input or output-directory check"""

    valid: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


@dataclass
class UnpackResult:
    """Aggregate counters and messages for one unpack run"""

    files_created: int = 0
    directories_created: int = 0
    errors: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class UnpackError(Exception):
    """Base exception for unpack errors"""

    pass


class InvalidInputError(UnpackError):
    """The input file is not a Repomix output file"""

    pass


class OutputDirectoryError(UnpackError):
    """The output directory cannot be used"""

    pass


class SecurityError(UnpackError):
    """Security-related errors such as path traversal attempts"""

    pass


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Setup structured logging"""
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


class RepomixParser:
    """Streaming parser for the Files section of a Repomix output file.

    The same separator line opens a file header, closes it, and closes the
    file body. Which role it plays is decided by the current state and by
    how far it is from the previous separator: a header is always two
    separators around a single ``File:`` line, so a separator within
    ``PROXIMITY_WINDOW`` lines of the last one closes a header, and any
    other separator closes content.
    """

    FILE_SEPARATOR = "================"
    FILE_PREFIX = "File: "
    FILES_SECTION_HEADER = "Files"
    PROVENANCE_PHRASE = "merged representation"
    LINE_NUMBER_PATTERN = re.compile(r"^\s*\d+→")

    PROXIMITY_WINDOW = 3
    PROGRESS_INTERVAL = 100
    VALIDATION_SCAN_LINES = 100

    def __init__(self, config: Optional[Dict] = None):
        self.config = config or {}
        self.encoding = self.config.get("encoding", "utf-8")
        self.logger = logging.getLogger(LOGGER_NAME)

    def strip_line_number(self, line: str) -> str:
        """Remove a leading ``<spaces><digits>→`` annotation if present"""
        match = self.LINE_NUMBER_PATTERN.match(line)
        if match:
            return line[match.end() :]
        return line

    def iter_entries(
        self,
        lines: Iterable[str],
        on_progress: Optional[Callable[[ParseProgress], None]] = None,
    ) -> Iterator[FileEntry]:
        """Lazily yield file entries in the order they appear"""
        current: Optional[FileEntry] = None
        content_lines: List[str] = []
        in_files_section = False
        expecting_path = False
        in_content = False
        last_separator_line = 0
        line_number = 0

        for raw_line in lines:
            line_number += 1
            line = raw_line.rstrip("\n\r")

            if on_progress and line_number % self.PROGRESS_INTERVAL == 0:
                on_progress(
                    ParseProgress(
                        current_line=line_number,
                        current_file=current.path if current else None,
                    )
                )

            if not in_files_section:
                if line.strip() == self.FILES_SECTION_HEADER:
                    in_files_section = True
                continue

            if line == self.FILE_SEPARATOR:
                gap = line_number - last_separator_line
                last_separator_line = line_number

                if not in_content and not expecting_path:
                    expecting_path = True
                elif expecting_path and gap <= self.PROXIMITY_WINDOW:
                    expecting_path = False
                    in_content = True
                elif in_content and current is not None:
                    current.content = "\n".join(content_lines)
                    self.logger.debug(f"Parsed entry: {current.path}")
                    yield current
                    current = None
                    content_lines = []
                    in_content = False
                    # The closing separator also opens the next header
                    expecting_path = True
                continue

            if expecting_path and line.startswith(self.FILE_PREFIX):
                current = FileEntry(path=line[len(self.FILE_PREFIX) :].strip())
                content_lines = []
                continue

            if in_content and current is not None:
                content_lines.append(self.strip_line_number(line))

        # Final block without a closing separator
        if current is not None and in_content:
            current.content = "\n".join(content_lines)
            self.logger.debug(f"Parsed final entry: {current.path}")
            yield current

    def parse(
        self,
        lines: Iterable[str],
        on_progress: Optional[Callable[[ParseProgress], None]] = None,
    ) -> List[FileEntry]:
        """Parse a line stream into a list of entries"""
        return list(self.iter_entries(lines, on_progress))

    def _parse_file_sync(
        self,
        file_path: Path,
        on_progress: Optional[Callable[[ParseProgress], None]] = None,
    ) -> List[FileEntry]:
        # Undecodable bytes become U+FFFD instead of aborting the whole run
        with open(file_path, "r", encoding=self.encoding, errors="replace") as f:
            return self.parse(f, on_progress)

    async def parse_file(
        self,
        file_path: PathLike,
        on_progress: Optional[Callable[[ParseProgress], None]] = None,
    ) -> List[FileEntry]:
        """Parse a Repomix file from disk (async via thread pool)"""
        return await run_in_thread(self._parse_file_sync, Path(file_path), on_progress)

    def validate_lines(self, lines: Iterable[str]) -> ValidationResult:
        """Check a line stream, reading no further than needed.

        Scanning stops once more than ``VALIDATION_SCAN_LINES`` lines have
        been read and the Files marker has been seen.
        """
        first_line = ""
        has_files_section = False
        line_count = 0

        for raw_line in lines:
            line_count += 1
            line = raw_line.rstrip("\n\r")

            if line_count == 1:
                first_line = line

            if line.strip() == self.FILES_SECTION_HEADER:
                has_files_section = True

            if line_count > self.VALIDATION_SCAN_LINES and has_files_section:
                break

        if self.PROVENANCE_PHRASE not in first_line:
            return ValidationResult(
                False, "File does not appear to be a valid Repomix output file"
            )

        if not has_files_section:
            return ValidationResult(False, "Files section not found in Repomix file")

        return ValidationResult(True)

    def _validate_sync(self, file_path: Path) -> ValidationResult:
        try:
            with open(file_path, "r", encoding=self.encoding, errors="replace") as f:
                return self.validate_lines(f)
        except OSError as e:
            return ValidationResult(False, f"Error reading file: {e}")

    async def validate_repomix_file(self, file_path: PathLike) -> ValidationResult:
        """Check the provenance line and the Files marker without parsing"""
        return await run_in_thread(self._validate_sync, Path(file_path))


class FileWriter:
    """Writes parsed entries to disk, creating each directory at most once.

    The directory ledger belongs to the instance, so every unpack run
    should use its own writer.
    """

    PROBE_FILENAME = ".repomix-unpack-test"

    def __init__(self, config: Optional[Dict] = None):
        self.config = config or {}
        self.encoding = self.config.get("encoding", "utf-8")
        self.safe_paths = self.config.get("safe_paths", True)
        self.logger = logging.getLogger(LOGGER_NAME)

        # Insertion-ordered so cleanup can walk creations in reverse
        self._created_directories: Dict[str, None] = {}
        self._known_directories = set()

    def _destination(self, output_dir: Path, relative_path: str) -> Path:
        """Map an entry path onto the output directory.

        With ``safe_paths`` enabled the result is resolved and must stay
        inside ``output_dir``.

        Raises:
            SecurityError: If the path would escape the output directory
        """
        if not self.safe_paths:
            return output_dir / relative_path

        if "\x00" in relative_path:
            raise SecurityError(
                f"Path contains null bytes: {repr(relative_path)}"
            )

        base_dir = output_dir.resolve()
        normalized_path = relative_path.lstrip("/")
        target_path = (base_dir / normalized_path).resolve()

        try:
            target_path.relative_to(base_dir)
        except ValueError:
            raise SecurityError(
                f"Path traversal attempt detected: '{relative_path}' "
                f"would escape output directory '{base_dir}'"
            )

        return target_path

    def _write_text_sync(self, file_path: Path, content: str) -> None:
        with open(file_path, "w", encoding=self.encoding, newline="") as f:
            f.write(content)

    async def write_file(
        self, entry: FileEntry, output_dir: PathLike, dry_run: bool = False
    ) -> None:
        """Write one entry below output_dir, overwriting any existing file"""
        full_path = self._destination(Path(output_dir), entry.path)

        if dry_run:
            self.logger.info(f"[DRY RUN] Would create: {full_path}")
            return

        await self.ensure_directory(full_path.parent)
        await run_in_thread(self._write_text_sync, full_path, entry.content)
        self.logger.debug(f"Wrote: {full_path}")

    def _make_directory_sync(self, dir_path: str) -> bool:
        if os.path.isdir(dir_path):
            return False
        os.makedirs(dir_path, exist_ok=True)
        return True

    async def ensure_directory(self, dir_path: PathLike) -> bool:
        """Create dir_path if needed; True only when it was newly created"""
        key = str(dir_path)
        if key in self._created_directories or key in self._known_directories:
            return False

        created = await run_in_thread(self._make_directory_sync, key)
        if created:
            self._created_directories[key] = None
            self.logger.debug(f"Created directory: {key}")
        else:
            self._known_directories.add(key)
        return created

    def _discard_probe(self, probe: Path) -> None:
        try:
            if probe.exists():
                probe.unlink()
        except OSError as e:
            self.logger.warning(f"Cannot remove probe file {probe}: {e}")

    def _validate_output_sync(self, output_dir: Path, create: bool) -> ValidationResult:
        try:
            if output_dir.exists() and not output_dir.is_dir():
                return ValidationResult(
                    False, f"Output path exists but is not a directory: {output_dir}"
                )

            if not output_dir.exists():
                if not create:
                    return ValidationResult(True)
                output_dir.mkdir(parents=True, exist_ok=True)

            probe = output_dir / self.PROBE_FILENAME
            try:
                probe.write_text("test", encoding="utf-8")
            except OSError:
                # A write can fail after the file was created
                self._discard_probe(probe)
                return ValidationResult(
                    False, f"No write permission in output directory: {output_dir}"
                )
            try:
                probe.unlink()
            except OSError as e:
                return ValidationResult(
                    False, f"Cannot remove probe file in output directory: {e}"
                )

            return ValidationResult(True)
        except OSError as e:
            return ValidationResult(False, f"Error validating output directory: {e}")

    async def validate_output_directory(
        self, output_dir: PathLike, create: bool = True
    ) -> ValidationResult:
        """Make sure output_dir is a writable directory, creating it if allowed"""
        return await run_in_thread(self._validate_output_sync, Path(output_dir), create)

    def get_created_directories_count(self) -> int:
        return len(self._created_directories)

    def _cleanup_sync(self) -> int:
        removed = 0
        for dir_path in reversed(list(self._created_directories)):
            try:
                if not os.listdir(dir_path):
                    os.rmdir(dir_path)
                    del self._created_directories[dir_path]
                    removed += 1
            except OSError:
                pass
        return removed

    async def cleanup_empty_directories(self) -> int:
        """Best-effort removal of created directories that ended up empty"""
        removed = await run_in_thread(self._cleanup_sync)
        if removed:
            self.logger.debug(f"Removed {removed} empty directories")
        return removed


class RepomixUnpacker:
    """Validate, parse and write a Repomix file in one run"""

    def __init__(self, config: Optional[Dict] = None):
        self.config = config or {}

        self.console = Console() if HAS_RICH else None
        self.logger = setup_logging(self.config.get("verbose", False))

        self.dry_run = self.config.get("dry_run", False)
        self.verbose = self.config.get("verbose", False)
        self.cleanup_empty_dirs = self.config.get("cleanup_empty_dirs", False)

        # TTY detection for progress bars (disable in non-interactive terminals like CI/CD)
        self.is_tty = sys.stdout.isatty()

        self.parser = RepomixParser(self.config)
        self.writer = FileWriter(self.config)

    def _log_parse_progress(self, progress: ParseProgress) -> None:
        file_info = (
            f" (processing: {progress.current_file})" if progress.current_file else ""
        )
        self.logger.debug(f"Parsed {progress.current_line} lines{file_info}")

    async def unpack(
        self,
        input_file: PathLike,
        output_dir: PathLike = DEFAULT_OUTPUT_DIR,
        progress: bool = True,
    ) -> UnpackResult:
        """Extract every entry of input_file into output_dir.

        Raises:
            UnpackError: If the input is missing or is not a Repomix file,
                or the output directory is unusable. Nothing is written.
        """
        input_path = Path(input_file).resolve()
        output_path = Path(output_dir).resolve()
        result = UnpackResult()

        if not input_path.exists():
            raise UnpackError(f"Input file not found: {input_path}")
        if not input_path.is_file():
            raise UnpackError(f"Input path is not a file: {input_path}")

        validation = await self.parser.validate_repomix_file(input_path)
        if not validation:
            raise InvalidInputError(validation.error or "Invalid Repomix file")

        output_validation = await self.writer.validate_output_directory(
            output_path, create=not self.dry_run
        )
        if not output_validation:
            raise OutputDirectoryError(
                output_validation.error or "Invalid output directory"
            )

        self.logger.info(f"Unpacking: {input_path}")
        self.logger.info(f"Output directory: {output_path}")
        if self.dry_run:
            self.logger.info("DRY RUN - no files will be created")

        show_progress = progress and self.is_tty and not self.verbose

        entries = await self._parse_entries(input_path, show_progress)
        self.logger.info(f"Found {len(entries)} files to extract")

        await self._write_entries(entries, output_path, result, show_progress)

        if self.cleanup_empty_dirs and not self.dry_run:
            await self.writer.cleanup_empty_directories()

        result.directories_created = self.writer.get_created_directories_count()
        self._print_summary(result, output_path)
        return result

    async def _parse_entries(
        self, input_path: Path, show_progress: bool
    ) -> List[FileEntry]:
        """Parse the whole input, reporting progress as lines are consumed.

        Raises:
            InvalidInputError: If the input cannot be read
        """
        progress_bar = None
        task = None
        pbar = None
        on_progress = None

        if self.verbose:
            on_progress = self._log_parse_progress
        elif show_progress:
            if HAS_RICH and self.console:
                progress_bar = Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    TimeElapsedColumn(),
                    console=self.console,
                )
                progress_bar.start()
                task = progress_bar.add_task("Parsing Repomix file...", total=None)

                def on_progress(progress: ParseProgress) -> None:
                    progress_bar.update(
                        task,
                        description=f"Parsing Repomix file... {progress.current_line} lines",
                    )

            elif HAS_TQDM:
                pbar = tqdm(desc="Parsing Repomix file", unit="lines")

                def on_progress(progress: ParseProgress) -> None:
                    pbar.update(progress.current_line - pbar.n)

            else:
                print("Parsing Repomix file...")

                def on_progress(progress: ParseProgress) -> None:
                    print(f"Parsed {progress.current_line} lines...", end="\r")

        try:
            return await self.parser.parse_file(input_path, on_progress)
        except OSError as e:
            raise InvalidInputError(f"Error reading file: {e}")
        finally:
            if progress_bar is not None:
                progress_bar.stop()
            elif pbar is not None:
                pbar.close()

    async def _write_entries(
        self,
        entries: List[FileEntry],
        output_path: Path,
        result: UnpackResult,
        show_progress: bool,
    ) -> None:
        total = len(entries)
        progress_bar = None
        task = None
        pbar = None
        if show_progress and total > 0:
            if HAS_RICH and self.console:
                progress_bar = Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    BarColumn(),
                    MofNCompleteColumn(),
                    TimeElapsedColumn(),
                    console=self.console,
                )
                progress_bar.start()
                task = progress_bar.add_task("Extracting files", total=total)
            elif HAS_TQDM:
                pbar = tqdm(total=total, desc="Extracting files", unit="files")
            else:
                print(f"Extracting {total} files...")

        try:
            for index, entry in enumerate(entries, 1):
                if not entry.path:
                    result.skipped.append(f"Entry {index} has an empty path")
                    self.logger.warning(f"Skipping entry {index}: empty path")
                else:
                    self.logger.debug(f"Extracting {index}/{total}: {entry.path}")
                    try:
                        await self.writer.write_file(entry, output_path, self.dry_run)
                        result.files_created += 1
                    except Exception as e:
                        message = f"Failed to write {entry.path}: {e}"
                        result.errors.append(message)
                        self.logger.error(message)
                        if self.verbose:
                            self.logger.error(traceback.format_exc())

                if progress_bar and task is not None:
                    progress_bar.update(task, advance=1)
                elif pbar is not None:
                    pbar.update(1)
        finally:
            if progress_bar:
                progress_bar.stop()
            elif pbar is not None:
                pbar.close()

    def _print_summary(self, result: UnpackResult, output_path: Path) -> None:
        files_label = "to be created" if self.dry_run else "created"

        if HAS_RICH and self.console:
            self.console.print("\n[bold]Summary:[/bold]")
            self.console.print(
                f"  [green]✓[/green] Files {files_label}: [green]{result.files_created}[/green]"
            )
            self.console.print(
                f"  [green]✓[/green] Directories {files_label}: [green]{result.directories_created}[/green]"
            )
            if result.errors:
                self.console.print(f"  [red]✗[/red] Errors: [red]{len(result.errors)}[/red]")
                if self.verbose:
                    for error in result.errors:
                        self.console.print(f"    [red]- {error}[/red]")
            if result.skipped:
                self.console.print(
                    f"  [yellow]⚠[/yellow] Skipped: [yellow]{len(result.skipped)}[/yellow]"
                )
            if not self.dry_run:
                self.console.print(f"\n  Output directory: [blue]{output_path}[/blue]")
        else:
            print("\nSummary:")
            print(f"  ✓ Files {files_label}: {result.files_created}")
            print(f"  ✓ Directories {files_label}: {result.directories_created}")
            if result.errors:
                print(f"  ✗ Errors: {len(result.errors)}")
                if self.verbose:
                    for error in result.errors:
                        print(f"    - {error}")
            if result.skipped:
                print(f"  ⚠ Skipped: {len(result.skipped)}")
            if not self.dry_run:
                print(f"\n  Output directory: {output_path}")


def create_config_file(config_path: Path) -> bool:
    """Create a default configuration file"""
    default_config = """# Repomix Unpack Configuration
# Uncomment and modify values as needed

# Text encoding of the input file and of the restored files
# encoding = "utf-8"

# Remove directories that end up empty after unpacking
# cleanup_empty_dirs = false

# Refuse entry paths that would escape the output directory
# safe_paths = true

# Feature flags
# dry_run = false
# verbose = false
"""

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(default_config)
        return True
    except OSError as e:
        print(f"Error creating config file: {e}", file=sys.stderr)
        return False


def load_config_file(config_path: Path) -> Dict:
    """Load ``key = value`` configuration, ignoring comments and blank lines"""
    if not config_path.exists():
        return {}

    config = {}
    line_num = 0
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip("\"'")

                if value.lower() in ("true", "false"):
                    config[key] = value.lower() == "true"
                elif value.isdigit():
                    config[key] = int(value)
                else:
                    config[key] = value

    except (OSError, UnicodeDecodeError) as e:
        print(
            f"Warning: Error loading config file on line {line_num}: {e}",
            file=sys.stderr,
        )

    return config


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code"""
    parser = argparse.ArgumentParser(
        prog="repomix-unpack",
        description="Extract files from a Repomix output file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s repomix-output.txt
  %(prog)s repomix-output.txt -o ./restored
  %(prog)s repomix-output.txt -o ./restored --dry-run --verbose
        """,
    )

    parser.add_argument("input_file", nargs="?", help="Path to the Repomix output file")
    parser.add_argument(
        "-o", "--output", default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "-d", "--dry-run", action="store_true",
        help="Show what would be extracted without creating files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--no-progress", action="store_true", help="Disable progress bars"
    )
    parser.add_argument(
        "--cleanup-empty-dirs", action="store_true",
        help="Remove created directories that end up empty",
    )
    parser.add_argument(
        "--allow-unsafe-paths", action="store_true",
        help="Write entries whose paths escape the output directory",
    )
    parser.add_argument(
        "--config", type=Path, default=DEFAULT_CONFIG_PATH,
        help="Configuration file path",
    )
    parser.add_argument(
        "--create-config", action="store_true", help="Create default config"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)

    try:
        if args.create_config:
            if create_config_file(args.config):
                print(f"Created default configuration file: {args.config}")
                return 0
            print(f"Failed to create configuration file: {args.config}")
            return 1

        if not args.input_file:
            parser.error("input_file is required")

        input_path = Path(args.input_file)
        if not input_path.exists():
            print(f"Error: Input file not found: {input_path}", file=sys.stderr)
            return 1

        config = load_config_file(args.config)

        # Command line flags only ever switch features on
        if args.dry_run:
            config["dry_run"] = True
        if args.verbose:
            config["verbose"] = True
        if args.cleanup_empty_dirs:
            config["cleanup_empty_dirs"] = True
        if args.allow_unsafe_paths:
            config["safe_paths"] = False

        unpacker = RepomixUnpacker(config)
        result = await unpacker.unpack(
            input_path, args.output, progress=not args.no_progress
        )
        return 0 if result.success else 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except UnpackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        return 1


def cli_main():
    """Synchronous entry point for console scripts"""
    return asyncio.run(main())


if __name__ == "__main__":
    sys.exit(cli_main())
