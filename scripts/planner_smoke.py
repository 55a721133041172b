from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fire_planner.tools.planner_tools import (
    tool_passive_income, tool_project, tool_reachable_pot, tool_solve_contribution
)

def main():
    plan = {
        "current_funds": "100000",
        "target_goal": "1000000",
        "years": "10",
        "monthly_contribution": "1500",
        "contribution_increase_pct": "5",
        "annual_return_pct": "6",
        "annual_inflation_pct": "2",
    }
    pr = tool_project(plan, percent=True)
    s = pr["summary"]
    print("Months:", len(pr["result"]["points"]))
    print("Final nominal:", round(s["final_nominal"], 2))
    print("Final real:", round(s["final_real"], 2))
    print("Hit month:", s["hit_month"])
    for row in pr["passive_income"]:
        print("Passive:", row["rate"], round(row["monthly"], 2), "/mo")

    sol = tool_solve_contribution(
        {"current_funds": 0, "target_goal": 1000000, "years": 30, "annual_return_pct": 7},
        percent=True,
    )
    print("Required monthly:", round(sol["monthly_contribution"], 2), sol["status"])

    pot = tool_reachable_pot(plan, percent=True)
    print("Reachable pot:", round(pot["final_nominal"], 2))

    pi = tool_passive_income({"final_pot": 1000000, "rates": [0.03, 0.04]})
    print("Passive rows:", len(pi["rows"]))

if __name__ == "__main__":
    main()
