#!/usr/bin/env python3
"""
Query an XML file by XPath

Usage:
    xmlparser-core <xml_file> <xpath> [options]

Examples:
    # Inner text of the first match
    xmlparser-core message.xml /msg/appmsg/title

    # Name -> text map of all children
    xmlparser-core message.xml "/msg/appmsg/*" --many

    # One attribute / all attributes of the first match
    xmlparser-core message.xml /msg/img --attr cdnurl
    xmlparser-core message.xml /msg/img --attrs

    # Outer XML of every match, evaluated under the first <mmreader>
    xmlparser-core message.xml "category/item" --scope //mmreader --outer

    # Re-serialize the (recovered) document
    xmlparser-core broken.xml /msg --quiet-parse --output fixed.xml

    # Keep the effective settings for later runs
    xmlparser-core message.xml /msg --config parser.yaml --save-config parser.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from xmlparser_core.config.settings import ParserConfig, get_default_config, load_config, save_config
from xmlparser_core.document.context import DocumentContext
from xmlparser_core.document.enumerator import NodeEnumerator
from xmlparser_core.document.nodeset import NodeSet

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_INVALID_DOCUMENT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xmlparser-core",
        description="Extract text, attributes and subtrees from an XML file by XPath",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s message.xml /msg/appmsg/title
  %(prog)s message.xml "/msg/appmsg/*" --many
  %(prog)s message.xml /msg/img --attr cdnurl
        """
    )

    parser.add_argument("xml_file", type=Path, help="Path to the XML file")
    parser.add_argument("xpath", help="XPath expression to evaluate")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--many",
        action="store_true",
        help="Print a JSON map of local name -> inner text for all matches"
    )
    mode.add_argument(
        "--attr",
        metavar="NAME",
        default=None,
        help="Print one attribute of the first match"
    )
    mode.add_argument(
        "--attrs",
        action="store_true",
        help="Print a JSON map of all attributes of the first match"
    )
    mode.add_argument(
        "--outer",
        action="store_true",
        help="Print the outer XML of every match"
    )
    mode.add_argument(
        "--count",
        action="store_true",
        help="Print the number of matches"
    )

    parser.add_argument(
        "--scope",
        metavar="XPATH",
        default=None,
        help="With --many or --outer, evaluate the expression under the first node matching this expression"
    )
    parser.add_argument(
        "-q", "--quiet-parse",
        action="store_true",
        help="Do not report parser diagnostics"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Parser configuration file (JSON or YAML)"
    )
    parser.add_argument(
        "--save-config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write the effective parser configuration to this path (JSON or YAML)"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Also write the parsed document to this path"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: from config, INFO)"
    )
    return parser


def _print_outer(doc: DocumentContext, expr: str, scope) -> bool:
    with NodeEnumerator(doc, expr, scope) as nodes:
        if nodes.is_invalid() or not nodes.has_next():
            return False
        for node in nodes:
            print(doc.outer_xml(node))
    return True


def _print_count(doc: DocumentContext, expr: str) -> bool:
    def handler(node_set: NodeSet) -> bool:
        print(node_set.count)
        return True

    return doc.evaluate_with_handler(expr, handler)


def run(args: argparse.Namespace, config: ParserConfig) -> int:
    data = args.xml_file.read_bytes()

    with DocumentContext(data, suppress_errors=args.quiet_parse, config=config) as doc:
        if not doc.is_valid:
            print(f"Could not parse {args.xml_file}", file=sys.stderr)
            return EXIT_INVALID_DOCUMENT

        scope = None
        if args.scope:
            with doc.evaluate(args.scope) as scope_nodes:
                scope = scope_nodes.first() if scope_nodes else None
            if scope is None:
                print(f"No node matches scope {args.scope}", file=sys.stderr)
                return EXIT_NO_MATCH

        if args.many:
            if scope is not None:
                found, values = doc.extract_many_values_from_node(scope, args.xpath)
            else:
                found, values = doc.extract_many_values(args.xpath)
            if found:
                print(json.dumps(values, ensure_ascii=False, indent=2))
        elif args.attr:
            found, value = doc.extract_attribute_value(args.xpath, args.attr)
            if found:
                print(value)
        elif args.attrs:
            found, values = doc.extract_all_attributes(args.xpath)
            if found:
                print(json.dumps(values, ensure_ascii=False, indent=2))
        elif args.outer:
            found = _print_outer(doc, args.xpath, scope)
        elif args.count:
            found = _print_count(doc, args.xpath)
        else:
            found, value = doc.extract_single_value(args.xpath)
            if found:
                print(value)

        if args.output and not doc.serialize_to_file(args.output):
            print(f"Could not write {args.output}", file=sys.stderr)

    return EXIT_OK if found else EXIT_NO_MATCH


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else get_default_config()
    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.xml_file.exists():
        parser.error(f"XML file not found: {args.xml_file}")

    if args.save_config:
        save_config(config, args.save_config)

    return run(args, config)


if __name__ == "__main__":
    sys.exit(main())
