"""No-translate post-processor entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from notranslate.errors import PostProcessorError
from notranslate.models import TranslationRecord
from notranslate.patterns.literal import extract_literal_phrases, strip_literal_tags
from notranslate.processing.patterns_postprocessor import PatternsPostProcessor
from notranslate.registry.pattern_store import PatternStore

logger = logging.getLogger("notranslate")


def emit_result(data: dict) -> None:
    sys.stdout.write(f"\nJSON_RESULT:{json.dumps(data, ensure_ascii=False)}\n")
    sys.stdout.flush()


def load_record(path: str, extract_literals: bool = False) -> TranslationRecord:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Record must be a JSON object: {path}")
    if extract_literals and data.get("source_text"):
        phrases = set(data.get("literal_protected_phrases") or [])
        phrases.update(extract_literal_phrases(data["source_text"]))
        data["literal_protected_phrases"] = sorted(phrases)
        data["source_text"] = strip_literal_tags(data["source_text"])
    return TranslationRecord.from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="No-translate post-processor")
    parser.add_argument("--patterns", required=True, help="Pattern YAML file or directory")
    parser.add_argument("--record", required=True, help="Translation record (JSON)")
    parser.add_argument("--lang", required=True, help="Source language id (e.g. fr)")
    parser.add_argument("--output", help="Write the final text to this path")
    parser.add_argument("--json-output", action="store_true", help="Print a JSON_RESULT line")
    parser.add_argument(
        "--extract-literals",
        action="store_true",
        help="Protect <literal>...</literal> spans found in source_text",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='[%(asctime)s] [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stdout,
    )

    if not os.path.exists(args.record):
        print(f"[Error] Record file not found: {args.record}")
        return 1

    try:
        store = PatternStore(args.patterns)
        for ref in store.list_languages():
            logger.debug(f"[NoTranslate] {ref.language_id}: {ref.count} pattern(s) in {ref.path}")
        processor = PatternsPostProcessor(store.build_language(args.lang))
        logger.info(f"[NoTranslate] Loaded patterns for: {args.lang}")

        record = load_record(args.record, extract_literals=args.extract_literals)
        result = processor.process(record, args.lang)
    except (PostProcessorError, ValueError) as e:
        if args.json_output:
            emit_result({"success": False, "error": str(e)})
        else:
            print(f"[Error] {e}")
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result.final_text)
        logger.info(f"[NoTranslate] Output saved: {args.output}")

    if args.json_output:
        emit_result({"success": True, **result.to_dict()})
    else:
        print(result.final_text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
