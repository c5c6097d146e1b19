"""
Command-line entry point for fund search

Usage:
    python search_cli.py query "What is the NAV of SBI Technology Opportunities Fund?"
    python search_cli.py suggest "sbi tceh"
    python search_cli.py import funds path/to/funds.json
    python search_cli.py stats

Each run loads the corpus from the configured data files, so `import` only
checks that a file would load as a replacement for its category. To use the
file, point FUNDS_PATH (or STOCKS_PATH, HOLDINGS_PATH) at it.
"""
import argparse
import json
import sys
from pathlib import Path

from fund_search import FundSearchSystem


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search funds or ask questions about them")
    parser.add_argument('--embeddings', action='store_true', help="Rank with the embedding model")
    subparsers = parser.add_subparsers(dest='command', required=True)

    query_parser = subparsers.add_parser('query', help="Search or ask a question")
    query_parser.add_argument('text')

    suggest_parser = subparsers.add_parser('suggest', help="Autocomplete suggestions")
    suggest_parser.add_argument('text')

    import_parser = subparsers.add_parser('import', help="Check that a JSON file loads as a replacement "
                                                "for a data category (data files are not modified)")
    import_parser.add_argument('category', choices=['funds', 'stocks', 'holdings'])
    import_parser.add_argument('path')

    subparsers.add_parser('stats', help="Show corpus and metrics summary")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    system = FundSearchSystem(use_embeddings=True if args.embeddings else None)

    if args.command == 'query':
        output = {
            'analysis': system.analyze(args.text).model_dump(by_alias=True),
            'results': [r.to_dict() for r in system.handle_query(args.text)]
        }
    elif args.command == 'suggest':
        output = [s.model_dump(by_alias=True) for s in system.suggest(args.text)]
    elif args.command == 'import':
        try:
            text = Path(args.path).read_text(encoding='utf-8')
        except OSError as e:
            output = system.error_handler.format_error_response(e, {'path': args.path})
        else:
            output = system.import_data(args.category, text)
            output['data_files_modified'] = False
    else:
        output = system.get_stats()

    print(json.dumps(output, indent=2, ensure_ascii=False, default=str))
    if isinstance(output, dict) and (output.get('error') or output.get('success') is False):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
