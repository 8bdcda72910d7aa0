"""CLI utilities for the publishing pipeline."""
from .style import (
    console,
    print_status,
    print_rule,
    print_table,
    parameter_notice,
    report_deployed_contracts,
    confirm_action,
    symbol_map,
    color_map,
)

__all__ = [
    'console',
    'print_status',
    'print_rule',
    'print_table',
    'parameter_notice',
    'report_deployed_contracts',
    'confirm_action',
    'symbol_map',
    'color_map',
]
