"""
Main entry point for the album archiver.
"""

import sys
import argparse
from .archiver import AlbumArchiver, ArchiverError
from .config import ConfigurationError, load_settings
from .database import LinkStore, LinkStoreError
from .logging import setup_logging, get_logger
from .prompt import format_instant


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Archive album links created before a threshold date",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview what would be archived (safe)
  album-archiver --dry-run
  
  # Interactive archival of every code in ./codes
  album-archiver
  
  # Use another folder and threshold than the environment
  album-archiver --codes-dir ./batch2 --threshold 2023-06-01T00:00:00Z

Answer y to archive a code, n to skip it, A to archive it and every
remaining code without further prompts.
        """
    )
    
    parser.add_argument(
        "--codes-dir",
        help="Folder holding the album code images (default: CODES_DIR or ./codes)"
    )
    
    parser.add_argument(
        "--threshold",
        help="Archive links made before this ISO date/time (default: DATE_THRESHOLD)"
    )
    
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be archived without prompting or updating"
    )
    
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override LOG_LEVEL from configuration"
    )
    
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    
    try:
        settings = load_settings(
            codes_dir=args.codes_dir,
            date_threshold=args.threshold,
            log_level=args.log_level
        )
    except ConfigurationError as e:
        setup_logging(args.log_level or "INFO")
        get_logger("main").error(f"❌ {e}")
        return 1
    
    setup_logging(settings.log_level)
    logger = get_logger("main")
    logger.info(f"🚀 Archiving links made before {format_instant(settings.date_threshold)}")
    if args.dry_run:
        logger.info("🔍 DRY RUN: no records will be changed")
    
    try:
        with LinkStore(settings) as store:
            archiver = AlbumArchiver(settings, store, dry_run=args.dry_run)
            archiver.run()
        return 0
        
    except (ArchiverError, LinkStoreError) as e:
        logger.error(f"❌ Error during archiving: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        logger.info("⏹️  Archiving interrupted by operator")
        return 130
    except Exception as e:
        logger.error(f"❌ Unexpected error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
