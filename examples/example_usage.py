"""Example: use the service layer without Flask.

Controllers stay thin; the statistics live in StatsEngine and ReportService.
"""

import importlib

from config import get_settings_module

from src.college_portal.college_portal.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)
    print("Class average:", container.report_service.class_average())
    for stats in container.report_service.low_attendance_alerts():
        print(f"{stats.student_name} ({stats.student_id}): {stats.percentage}%")


if __name__ == "__main__":
    main()
