from matchbin.cache import CacheMissError, CacheState, RankedCacheState, RouletteCacheState  # noqa: F401
from matchbin.index import WeightedIndex  # noqa: F401
from matchbin.models import ExpRouletteConfig, RankedConfig, RouletteConfig, SelectorConfig  # noqa: F401
from matchbin.partition import Partition, partition_scores  # noqa: F401
from matchbin.select import MatchQuery, build_selector, select_matches  # noqa: F401
from matchbin.selectors import BaseSelector, get_selector, list_selectors  # noqa: F401
from matchbin.selectors.exp_roulette import ExpRouletteSelector  # noqa: F401
from matchbin.selectors.ranked import RankedSelector  # noqa: F401
from matchbin.selectors.roulette import RouletteSelector  # noqa: F401
