"""linear-cli: analytics and reporting client for the Linear issue tracker."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("linear-cli")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from linear_cli.monthly import MonthlyProcessor
from linear_cli.period_filter import PeriodFilter, filter_issues_by_period
from linear_cli.reporting import generate_report
from linear_cli.workload import WorkloadCalculator, engineer_project_workload, team_project_workload

__all__ = [
    "MonthlyProcessor",
    "PeriodFilter",
    "WorkloadCalculator",
    "__version__",
    "engineer_project_workload",
    "filter_issues_by_period",
    "generate_report",
    "team_project_workload",
]
