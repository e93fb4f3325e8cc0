# src/sigstat/imports/__init__.py

from __future__ import annotations

from .lazyproxy import LazyModule, lazy_module

np = numpy = lazy_module("numpy", install="pip install numpy", reason="sample arrays and block arithmetic")
pd = pandas = lazy_module("pandas", install="pip install pandas", reason="Series/DataFrame inputs and summary tables")

__all__ = [
	"LazyModule", "lazy_module",
	"np", "numpy", "pd", "pandas",
]
