#!/usr/bin/env python3
"""
ResearchStudy builder CLI.

Builds a FHIR ResearchStudy from a JSON study description and optional site
list, and writes the resulting resource (or a searchset Bundle) as JSON.

Study description keys: id, title, description, status, conditions,
keywords, contacts ([{name, phone, email}]), sites ([{name, phone, email}]).

Usage:
    python main.py study.json [--sites sites.csv] [--output study_fhir.json]
    python main.py study.json --searchset --json-log
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from core.config import load_settings
from core.constants import SYSTEM_NAME, SYSTEM_VERSION
from core.errors import StudyBuilderError, SitesImportError
from core.logging_config import configure_logging
from research_study import ResearchStudy, SearchSet, load_sites

logger = logging.getLogger(__name__)


def build_study(description: Dict[str, Any], default_status: str) -> ResearchStudy:
    """Populate a ResearchStudy from a study description dict."""
    study = ResearchStudy(description.get("id", 0),
                          status=description.get("status", default_status))
    if description.get("title"):
        study.title = description["title"]
    if description.get("description"):
        study.description = description["description"]
    if description.get("conditions"):
        study.add_conditions(description["conditions"])
    if description.get("keywords"):
        study.add_keywords(description["keywords"])
    for contact in description.get("contacts", []):
        study.add_contact(contact["name"], contact.get("phone"), contact.get("email"))
    for site in description.get("sites", []):
        study.add_site(site["name"], site.get("phone"), site.get("email"))
    return study


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description=f"{SYSTEM_NAME} - build a FHIR ResearchStudy from a study description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("study_path", nargs="?", help="Path to the JSON study description")
    parser.add_argument("--sites", type=str, metavar="PATH", help="Path to site list (CSV/Excel)")
    parser.add_argument("--output", "-o", type=str, metavar="PATH", help="Write JSON here (default: stdout)")
    parser.add_argument("--searchset", action="store_true", help="Wrap the study in a searchset Bundle")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")

    log_group = parser.add_argument_group('Logging')
    log_group.add_argument("--json-log", action="store_true", help="Emit structured JSON log lines to stderr")
    log_group.add_argument("--log-file", type=str, metavar="PATH", help="Write JSON logs to file")

    args = parser.parse_args(argv)
    settings = load_settings()

    configure_logging(
        json_mode=args.json_log or settings.json_log,
        log_file=args.log_file or settings.log_file,
        level=logging.DEBUG if args.verbose else settings.log_level,
    )

    if not args.study_path:
        logger.error("Study description path is required. Use --help for usage.")
        return 1
    if not Path(args.study_path).exists():
        logger.error(f"Study description not found: {args.study_path}")
        return 1

    logger.info(f"{SYSTEM_NAME} v{SYSTEM_VERSION}")
    try:
        with open(args.study_path, "r", encoding="utf-8") as f:
            description = json.load(f)
        study = build_study(description, settings.default_status)
        if args.sites:
            result = load_sites(study, args.sites)
            if not result.success:
                raise SitesImportError(result.error, source_file=args.sites, study_id=study.id)
    except StudyBuilderError as e:
        logger.error(f"Failed to build study: {e}", extra={"study_id": e.study_id or ""})
        return 1
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in study description: {e}")
        return 1
    except KeyError as e:
        logger.error(f"Study description entry is missing required key {e}")
        return 1

    output = SearchSet([study]).to_dict() if args.searchset else study.to_dict()
    text = json.dumps(output, indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        logger.info(f"Wrote {study.id} to {args.output}")
    else:
        sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
