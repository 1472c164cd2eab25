"""Plain-text rendering of scores and alert lists."""

from __future__ import annotations

COLUMNS = ("Patient ID", "BP Score", "Temp Score", "Age Score", "Total Score", "Data Issues")


def _row(cells):
    return " | ".join(str(c).ljust(len(h)) for c, h in zip(cells, COLUMNS)).rstrip()


def _alert_section(label, ids):
    return [
        f"{label}: {len(ids)} patients",
        ", ".join(str(i) for i in ids) if ids else "None",
    ]


def render_report(scores, alerts) -> str:
    lines = ["=== Risk Score Summary ===", "", _row(COLUMNS)]
    for s in scores:
        lines.append(_row((
            s.patient_id,
            s.bp_score,
            s.temp_score,
            s.age_score,
            s.total_score,
            "Yes" if s.has_data_quality_issues else "No",
        )))

    lines += ["", "=== Alert Lists ===", ""]
    lines += _alert_section("High-Risk Patients (Total Risk Score ≥ 4)", alerts.high_risk_patients)
    lines.append("")
    lines += _alert_section("Fever Patients (Temperature ≥ 99.6°F)", alerts.fever_patients)
    lines.append("")
    lines += _alert_section("Data Quality Issues", alerts.data_quality_issues)
    return "\n".join(lines)
