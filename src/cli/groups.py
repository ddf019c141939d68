"""Shared help-panel groups for the structtag CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Session and configuration options.",
    sort_key=0,
)

rule_group = Group(
    "Rule",
    help="Control which encoding keys the exported-field rule checks.",
    sort_key=1,
)

output_group = Group(
    "Output",
    help="Configure how results are reported.",
    sort_key=2,
)

admin_group = Group(
    "Admin",
    help="Administrative commands and help.",
    sort_key=99,
)

__all__ = ["admin_group", "output_group", "rule_group", "session_group"]
