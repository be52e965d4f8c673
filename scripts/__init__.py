from .fetch_data import fetch_draw_history, history_years, parse_history
from .analyze_data import annotate_draws, attribute_frequency

__all__ = ['fetch_draw_history', 'history_years', 'parse_history',
           'annotate_draws', 'attribute_frequency']
