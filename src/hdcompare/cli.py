import argparse
import logging
import sys
import textwrap
from functools import wraps

from . import __version__
from .commands.hash import HashdeepFailed
from .partition.engine import PartitionError
from .settings import (
    Settings,
    SETTING_HASH_PROGRAM,
    SETTING_LOGGING_LEVEL,
    SETTING_LOGGING_PATH,
    DEFAULT_HASH_PROGRAM,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def reports_errors(func):
    """Decorator for command functions: report expected failures and exit with status 1.

    The decorated function receives (settings, args). Unexpected exceptions still propagate
    with their traceback.
    """
    @wraps(func)
    def wrapper(settings, args):
        try:
            return func(settings, args)
        except (OSError, ValueError, PartitionError, HashdeepFailed) as e:
            logger.error(f"{args.command} failed: {e}")
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    return wrapper


def _print_warnings(lines: list[str] | None, source: str | None = None) -> None:
    if not lines:
        return
    if source is not None:
        print(f"Warnings for {source}:", file=sys.stderr)
    for line in lines:
        print(line, file=sys.stderr)


def configure_logging(settings: Settings, log_file: str | None, log_level: str | None) -> bool:
    """Configure logging from CLI arguments, falling back to the settings file.

    Returns:
        True if logging was configured, False if no log file was given anywhere
    """
    if log_file is None:
        log_file = settings.get(SETTING_LOGGING_PATH)
    if not log_file:
        return False

    if log_level is None:
        log_level = str(settings.get(SETTING_LOGGING_LEVEL, 'INFO')).upper()

    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT
    )
    return True


def hdcompare_main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog='hdcompare',
        description='Compare hashdeep logs: find unchanged, edited, moved and unmatched files using only content '
                    'digests and paths.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              hdcompare hash /mnt/backup before.log
              hdcompare part before.log after.log compare/part
            ''').strip()
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Path to a TOML settings file. If not provided, uses the HDCOMPARE_CONFIG environment variable, or no '
             'settings.')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file for operation logging. If not provided, uses logging.path from the settings file or no '
             'logging.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to logging.level from the settings '
             'file, or INFO.')
    subparsers = parser.add_subparsers(
        dest='command',
        title='Commands',
        description='Available commands',
        help='Use "hdcompare COMMAND --help" for command-specific help'
    )

    parser_version = subparsers.add_parser(
        'version',
        help='Show the program version',
        description='Prints the hdcompare version.')
    parser_version.set_defaults(method=_version)

    parser_hash = subparsers.add_parser(
        'hash',
        help='Run hashdeep and generate a log compatible with hdcompare',
        description='Invokes hashdeep and generates a log file compatible with hdcompare.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Notes:
              This command is optional, but recommended to ensure log compatibility.

              It is equivalent to directly calling
                hashdeep -l -r -o f path/to/target_dir \\
                  > path/to/output_log.txt \\
                  2> path/to/output_log.txt.errors

              If the output file or the error file already exists, the command is aborted
              (hdcompare does not overwrite existing files).
            ''').strip())
    parser_hash.add_argument(
        'target_directory',
        metavar='TARGET_DIR',
        help='Directory to hash')
    parser_hash.add_argument(
        'output_path_base',
        metavar='OUTPUT_PATH_BASE',
        help='Log file to create; hashdeep errors go to the same path with ".errors" appended')
    parser_hash.set_defaults(method=_hash)

    parser_sort = subparsers.add_parser(
        'sort',
        help='Sort the entries of a hashdeep log by path',
        description='Sorts the entries in a hashdeep log by file path.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Notes:
              hashdeep does not guarantee the ordering of log entries, and ordering tends to be
              inconsistent between runs. Sorting allows comparison of logs in a text-diff tool,
              which may be the easiest way to compare logs with uncomplicated differences.

              If the output file already exists, the command is aborted.
            ''').strip())
    parser_sort.add_argument(
        'input_file',
        metavar='INPUT',
        help='hashdeep log to sort')
    parser_sort.add_argument(
        'output_file',
        metavar='OUTPUT',
        help='Sorted log to create')
    parser_sort.set_defaults(method=_sort)

    parser_root = subparsers.add_parser(
        'root',
        help='Change the root directory of a hashdeep log',
        description='Rewrites a hashdeep log relative to a subdirectory: the prefix is removed from matching paths and '
                    'entries outside the prefix are omitted.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              hdcompare root full.log photos.log photos/

            If the output file already exists, the command is aborted.
            ''').strip())
    parser_root.add_argument(
        'input_file',
        metavar='INPUT',
        help='hashdeep log to read')
    parser_root.add_argument(
        'output_file',
        metavar='OUTPUT',
        help='Log to create')
    parser_root.add_argument(
        'root_prefix',
        metavar='PREFIX',
        help='Path prefix to strip from entries')
    parser_root.set_defaults(method=_root)

    parser_part = subparsers.add_parser(
        'part',
        help='Partition the entries of two hashdeep logs by how they match',
        description='All entries are partitioned into sets that describe the similarities and differences of the two '
                    'log files: full matches (unchanged), name matches (edited), hashes matches (moved or renamed) '
                    'and entries with no match.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Notes:
              The output file base path names the output files by adding suffixes that describe
              the entries within (e.g. OUTPUT_BASE_full_match_pairs); it may include
              subdirectories. Nonexistent subdirectories are not created; if one is specified,
              the command is aborted.

              If any of the output files already exist, the command is aborted.
            ''').strip())
    parser_part.add_argument(
        'input_file1',
        metavar='LOG1',
        help='Earlier hashdeep log')
    parser_part.add_argument(
        'input_file2',
        metavar='LOG2',
        help='Later hashdeep log')
    parser_part.add_argument(
        'output_file_base',
        metavar='OUTPUT_BASE',
        help='Path prefix for the output files')
    parser_part.set_defaults(method=_part)

    args = parser.parse_args(argv)

    try:
        settings = Settings(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: invalid settings file: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings, args.log_file, args.log_level)

    if args.command is None:
        parser.print_help()
        return

    args.method(settings, args)


def _version(settings: Settings, args):
    print(f"hdcompare version {__version__}")


@reports_errors
def _hash(settings: Settings, args):
    from .commands.hash import do_hash

    program = str(settings.get(SETTING_HASH_PROGRAM, DEFAULT_HASH_PROGRAM))
    do_hash(args.target_directory, args.output_path_base, program)


@reports_errors
def _sort(settings: Settings, args):
    from .commands.sort import do_sort

    _print_warnings(do_sort(args.input_file, args.output_file), args.input_file)


@reports_errors
def _root(settings: Settings, args):
    from .commands.root import do_change_root

    result = do_change_root(args.input_file, args.output_file, args.root_prefix)
    _print_warnings(result.file_warning_lines, args.input_file)
    for line in result.info_lines:
        print(line)
    _print_warnings(result.warning_lines)


@reports_errors
def _part(settings: Settings, args):
    from .commands.part import do_part

    result = do_part(args.input_file1, args.input_file2, args.output_file_base)
    _print_warnings(result.file1_warning_lines, args.input_file1)
    _print_warnings(result.file2_warning_lines, args.input_file2)
    print(result.stats)


if __name__ == '__main__':
    hdcompare_main()
