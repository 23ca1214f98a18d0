# __main__.py

import argparse
import sys

from .config import ScrollConfig
from .logger import Logger
from .pager import Document, Pager


def main():
    parser = argparse.ArgumentParser(description='Page through a file with smooth, fold-aware scrolling')
    parser.add_argument('file',
        help='File to display; {{{ and }}} markers define folds')
    parser.add_argument('-d', '--duration',
        type=float, default=250,
        help='Scroll animation duration in milliseconds')
    parser.add_argument('--framerate',
        type=float, default=144,
        help='Maximum frames per second')
    parser.add_argument('--scrolloff',
        type=int, default=0,
        help='Rows kept between the cursor and the viewport edges')
    parser.add_argument('--open-folds',
        action='store_true',
        help='Start with all folds open')
    parser.add_argument('--enable-logging',
        action='store_true',
        help='Enable debug logging')
    parser.add_argument('--log-file',
        help='Log file path (use "-" for stdout)')

    args = parser.parse_args()

    try:
        config = ScrollConfig(
            duration=args.duration,
            max_framerate=args.framerate,
            logging_enabled=args.enable_logging,
            log_file=args.log_file
        )
        document = Document.from_file(args.file)
    except (ValueError, OSError) as e:
        parser.error(str(e))

    logger = Logger('viewtween', config.logging_enabled, config.log_file)
    pager = Pager(document, config, scrolloff=args.scrolloff, open_folds=args.open_folds, logger=logger)
    pager.run()
    return 0

if __name__ == "__main__":
    sys.exit(main())
