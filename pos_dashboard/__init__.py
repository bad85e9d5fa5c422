"""Top‑level package for the POS Dashboard.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``pos_finance_analytics`` – the net-profit formula shared by every screen
* ``savings`` – daily amortization of savings goals and their calendar
* ``visualization`` – functions that generate Plotly figures
* ``Home.py`` and ``pages/`` – the Streamlit screens

To run the dashboard from the command line you can execute:

```bash
python run_pos_dashboard.py
```
"""

from . import data_processing  # noqa: F401  # re-exported for convenience
from . import pos_finance_analytics  # noqa: F401  # re-exported for convenience
from . import savings  # noqa: F401  # re-exported for convenience
from .pos_finance_analytics import FinancialSummary, PosFinanceAnalytics, compute_financials  # noqa: F401
from .savings import daily_amortization  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "data_processing",
    "pos_finance_analytics",
    "savings",
    "FinancialSummary",
    "PosFinanceAnalytics",
    "compute_financials",
    "daily_amortization",
]
