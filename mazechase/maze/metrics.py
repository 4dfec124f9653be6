from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'walls_carved': 0,
        'loops_added': 0,
        'locks_requested': 0,
        'locks_placed': 0,
        'keys_placed': 0,
        'items_placed': 0,
        'enemies': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
