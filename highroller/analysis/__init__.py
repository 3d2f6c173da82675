"""Odds and fairness analysis for the engines."""
