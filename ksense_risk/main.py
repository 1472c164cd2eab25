from __future__ import annotations

import argparse
import logging

import requests

from ksense_risk.alerts import analyze
from ksense_risk.client import PatientClient
from ksense_risk.config import LOG_LEVELS, load_config
from ksense_risk.exceptions import ConfigError
from ksense_risk.report import render_report

log = logging.getLogger("ksense_risk")


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        prog="ksense-risk",
        description="Fetch patient records, score clinical risk and list alerts.",
    )
    parser.add_argument("--page-size", type=positive_int, default=None,
                        help="records per page (default: PAGE_SIZE or 20)")
    parser.add_argument("--submit", action="store_true",
                        help="POST the alert lists to /submit-assessment")
    parser.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                        help="logging level (default: LOG_LEVEL or INFO)")
    return parser


def main(argv=None, client_factory=PatientClient) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config()
    except ConfigError as exc:
        logging.basicConfig(level=logging.ERROR)
        log.error("Configuration error: %s", exc)
        return 1

    logging.basicConfig(
        level=args.log_level or config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    page_size = args.page_size if args.page_size is not None else config.page_size
    client = client_factory(config)

    print("=== DemoMed Risk Scoring System ===\n")
    patients = client.fetch_all_patients(page_size)
    if not patients:
        print("No patients found.")
        return 0

    print("\n=== Calculating Risk Scores ===\n")
    scores, alerts = analyze(patients)
    print(render_report(scores, alerts))

    if args.submit:
        log.info("Submitting assessment: %s",
                 {k: len(v) for k, v in alerts.to_payload().items()})
        try:
            resp = client.submit_assessment(alerts)
        except requests.RequestException as exc:
            log.error("Submission failed: %s", exc)
            return 1
        print("\nServer response:")
        print(resp)
    return 0
