from matchbin.selectors.base import BaseSelector, register_selector, get_selector, list_selectors, make_config  # noqa: F401

# Import built-in selectors to trigger registration
import matchbin.selectors.ranked  # noqa: F401
import matchbin.selectors.roulette  # noqa: F401
import matchbin.selectors.exp_roulette  # noqa: F401
