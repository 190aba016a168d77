"""Rule tables and the compliance rule engine.

- terms: the four term tables, disclaimer heuristics and YAML loading
- engine: category matching, risk-level derivation and scoring
"""
