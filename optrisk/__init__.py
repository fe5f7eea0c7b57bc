"""optrisk core package.

Option pricing, Greeks and implied volatility live in
:mod:`optrisk.bs_calculator`; multi-leg strategy analysis in
:mod:`optrisk.analysis`.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
