from typing import Any, Callable, Dict, Sequence

from fintrack.domain import DashboardState
from fintrack.insights import generate_insights, target_check
from fintrack.metrics import chart_data, compute_totals, overspend_warning, target_gap, validation_errors


def check_inputs(state: DashboardState) -> Sequence[str]:
    return validation_errors(state.income, state.target_savings, state.categories)


def totals_step(state: DashboardState, acc: Dict[str, Any]) -> Dict[str, Any]:
    return {"totals": compute_totals(state.income, state.categories)}


def warning_step(state: DashboardState, acc: Dict[str, Any]) -> Dict[str, Any]:
    return {"warning": overspend_warning(acc["totals"])}


def insights_step(state: DashboardState, acc: Dict[str, Any]) -> Dict[str, Any]:
    return {"insights": generate_insights(acc["totals"], state.income)}


def chart_step(state: DashboardState, acc: Dict[str, Any]) -> Dict[str, Any]:
    return {"chart_data": chart_data(acc["totals"])}


def target_step(state: DashboardState, acc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "target_gap": target_gap(acc["totals"], state.target_savings),
        "target_message": target_check(acc["totals"], state.target_savings),
    }


class DashboardService:
    """Facade that turns a ``DashboardState`` into everything the page displays.

    validators: functions taking the state -> Sequence[str] of messages
    calculators: functions taking (state, results so far) -> dict (partial results)
    """

    def __init__(
        self,
        validators: Sequence[Callable[[DashboardState], Sequence[str]]],
        calculators: Sequence[Callable[[DashboardState, Dict[str, Any]], Dict[str, Any]]],
    ):
        self.validators = validators
        self.calculators = calculators

    def report(self, state: DashboardState) -> Dict[str, Any]:
        """Run validators and calculators and return the aggregated report with intermediate steps."""
        report = {
            "month": state.month,
            "validation": [],
            "steps": [],
            "result": {},
        }

        for v in self.validators:
            try:
                msgs = v(state)
            except Exception as e:
                msgs = [f"validator_error: {e}"]
            report["validation"].append({"validator": getattr(v, "__name__", str(v)), "messages": list(msgs)})

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            out = calc(state, acc)
            report["steps"].append({"calculator": getattr(calc, "__name__", str(calc)), "output": out})
            acc.update(out)

        report["result"] = acc
        return report

    @staticmethod
    def messages(report: Dict[str, Any]) -> list[str]:
        return [m for entry in report["validation"] for m in entry["messages"]]


def default_service() -> DashboardService:
    return DashboardService(
        validators=[check_inputs],
        calculators=[totals_step, warning_step, insights_step, chart_step, target_step],
    )
