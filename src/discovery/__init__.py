"""Fake node discovery: payload NodeList -> SMD inventory records.

Modules
───────
  xname     — node xname -> BMC xname translation (with fallback)
  ledger    — per-run deduplication sets (component / system / manager)
  uid       — best-effort UUID issuance with a nil-UUID degraded path
  builders  — pure Node -> Component / System / Manager / endpoint / interface
  pipeline  — the discovery driver and JSON output writer
  groups    — group membership from node group labels
  config    — YAML config merged with CLI overrides
  cli       — argparse entry-point
"""
