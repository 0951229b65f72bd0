#!/usr/bin/env python3
"""
Preview script for the patient dashboard.

Generates a standalone HTML file for visual inspection of DashboardService
output. It is NOT a test - no assertions, no pass/fail, no network access.

Usage:
    python preview_dashboard.py [output.html]

Output:
    dashboard_preview.html (in the current directory) unless a path is given
"""

import sys
from pathlib import Path

# Ensure the packages are importable when running from the dashboard_svc directory
sys.path.insert(0, str(Path(__file__).parent))

from schemas import PatientRecord
from services.dashboard import DashboardService

MONTHS = [
    "March", "February", "January", "December", "November", "October",
    "September", "August", "July", "June",
]


def create_sample_record() -> PatientRecord:
    """
    Create a sample patient with ten months of history, newest first.

    Covers:
    - Blood pressure drifting upward (chart shows the most recent six months)
    - Mixed levels so card statuses differ
    - A non-empty diagnostic list and lab results
    """
    history = []
    for i, month in enumerate(MONTHS):
        year = 2024 if i < 3 else 2023
        systolic = 160 - i * 4
        diastolic = 78 + (i % 3) * 4
        history.append({
            "month": month,
            "year": year,
            "heart_rate": {"value": 70 + i, "levels": "Normal" if i % 4 else "Higher than Average"},
            "respiratory_rate": {"value": 16 + (i % 5), "levels": "Normal"},
            "temperature": {"value": 98.1 + (i % 3) * 0.3, "levels": "Normal" if i % 2 else "Lower than Average"},
            "blood_pressure": {
                "systolic": {"value": systolic, "levels": "Higher than Average" if systolic > 140 else "Normal"},
                "diastolic": {"value": diastolic, "levels": "Lower than Average" if diastolic < 80 else "Normal"},
            },
        })

    return PatientRecord.model_validate({
        "name": "Jessica Taylor",
        "gender": "Female",
        "date_of_birth": "08/23/1996",
        "phone_number": "(415) 555-1234",
        "emergency_contact": "(415) 555-5678",
        "insurance_type": "Sunrise Health Assurance",
        "profile_picture": "https://example.com/profiles/jessica-taylor.png",
        "diagnosis_history": history,
        "diagnostic_list": [
            {"name": "Hypertension", "description": "Chronic high blood pressure", "status": "Under Observation"},
            {"name": "Type 2 Diabetes", "description": "Insulin resistance and elevated blood sugar", "status": "Cured"},
            {"name": "Asthma", "description": "Recurrent episodes of bronchial constriction", "status": "Inactive"},
        ],
        "lab_results": ["Blood Tests", "CT Scans", "Radiology Reports", "X-Rays"],
    })


def main() -> None:
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("dashboard_preview.html")
    html = DashboardService().render_html(create_sample_record())
    output.write_text(html, encoding="utf-8")
    print(f"Dashboard preview written to {output.resolve()}")


if __name__ == "__main__":
    main()
