"""Core (UI-agnostic) request analytics logic.

This package contains:
- workbook reading (XLSX -> pandas -> request records)
- monthly / department aggregation (JSON-serializable results)
- dashboard filter normalization and payloads
- chart helpers (Altair -> Vega-Lite spec dict)
- the sine-signal magnitude spectrum
"""
