"""Example usage of the ja_tokenizer_sidecar package.

Run with: python src/samples/usage_example.py --dictionary path/to/system.dic.zst
"""

from __future__ import annotations

import argparse
import json
import logging
import sys


def build_example_text() -> str:
    """Build a short multi-line text to tokenize.

    Returns
    -------
    str
        Two lines of Japanese text with embedded whitespace.
    """

    return "銀座でランチをご一緒しましょう。\n明日、 会議があります。"


def main() -> None:
    """Spawn the sidecar and print the records for the example text."""

    # Make package importable when running from project root
    sys.path.append("src")

    from ja_tokenizer_sidecar import SidecarClient  # pylint: disable=C0415

    parser = argparse.ArgumentParser(description="Query the tokenizer sidecar")
    parser.add_argument("--dictionary", required=True, help="vibrato dictionary file")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    logger = logging.getLogger("usage_example")

    with SidecarClient(["--dictionary", args.dictionary, "--log-file", "sidecar.log"]) as client:
        logger.info("sidecar protocol version: %d", client.get_version())
        records = client.parse_text(build_example_text())
        logger.info("received %d records", len(records))
        for record in records[:5]:
            logger.info("record: %s", json.dumps(record, ensure_ascii=False))


if __name__ == "__main__":
    main()
