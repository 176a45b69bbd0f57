from __future__ import annotations

from sipplanner.tools.sip_tools import (
    tool_compute_goal_plan,
    tool_compute_growth_series,
    tool_compute_portfolio_summary,
)

def main():
    house = {
        "name": "House",
        "current_price": "5000000",
        "inflation_rate": "7",
        "years": "10",
        "expected_return": "12",
    }
    retirement = {
        "name": "Retirement",
        "currentPrice": 10000000,
        "inflationRate": 7,
        "years": 20,
        "expectedReturn": 12,
        "stepUpRate": 10,
    }

    plan = tool_compute_goal_plan(house)
    print("Future target:", plan["future_value"])
    print("Monthly SIP:", plan["monthly_sip"])
    print("Total invested:", plan["total_invested"])

    summary = tool_compute_portfolio_summary([house, retirement])
    print("Total monthly SIP:", summary["total_monthly_sip"])
    print("Total future value:", summary["total_future_value"])
    print("Total wealth gain:", summary["total_wealth_gain"])

    series = tool_compute_growth_series(retirement)
    for y, inv, fv in zip(series["years"], series["invested"], series["future_values"]):
        print("Year", y, "invested", inv, "value", fv)

if __name__ == "__main__":
    main()
