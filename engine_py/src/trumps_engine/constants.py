"""Game constants"""

from typing import Dict, List, Union

# Phases
PHASE_WAITING = 'waiting'
PHASE_STAT_SELECTION = 'stat_selection'
PHASE_CARD_SELECTION = 'card_selection'
PHASE_RESOLUTION = 'resolution'
PHASE_GAME_OVER = 'game_over'

# Boosters
BOOSTER_ORANGE = 'orange'
BOOSTER_PURPLE = 'purple'
BOOSTER_TEAMRANK = 'teamrank'

BOOSTER_TYPES = [BOOSTER_ORANGE, BOOSTER_PURPLE, BOOSTER_TEAMRANK]

BOOSTER_POLICY_REUSABLE = 'reusable'
BOOSTER_POLICY_CONSUMED = 'consumed'

CAP_MULTIPLIER = 1.2

TEAM_RANK_MULTIPLIERS: Dict[int, float] = {
    1: 1.4,
    2: 1.3,
    3: 1.2,
    4: 1.1,
}

# Stats
BATTING_STATS = [
    'Batting_Average',
    'Batting_Strike_Rate',
    'Runs_Scored',
    'Centuries',
    'Half_Centuries',
    'Sixes',
    'Fours',
]

BOWLING_STATS = [
    'Bowling_Average',
    'Bowling_Strike_Rate',
    'Economy_Rate',
    'Wickets_Taken',
    'Four_Wicket_Hauls',
    'Five_Wicket_Hauls',
]

# Stats where the smaller value wins a hand
LOWER_IS_BETTER_STATS = ['Economy_Rate', 'Bowling_Average', 'Bowling_Strike_Rate']

STAT_KEYS = [
    'Runs_Scored',
    'Batting_Average',
    'Batting_Strike_Rate',
    'Centuries',
    'Half_Centuries',
    'Sixes',
    'Fours',
    'Highest_Score',
    'Wickets_Taken',
    'Economy_Rate',
    'Bowling_Average',
    'Bowling_Strike_Rate',
    'Four_Wicket_Hauls',
    'Five_Wicket_Hauls',
]

# Table setup
HAND_SIZE = 5
DEFAULT_PLAYERS = ['Player 1', 'Player 2', 'Player 3', 'Player 4']
GAME_LOG_TAIL = 20

# Fallbacks used by the card store when a row is missing a value
UNKNOWN_TEAM = 'Unknown Team'

STORE_STAT_DEFAULTS: Dict[str, Union[int, float, str]] = {
    'Runs_Scored': 100,
    'Batting_Average': 35.5,
    'Batting_Strike_Rate': 140.2,
    'Centuries': 2,
    'Half_Centuries': 5,
    'Sixes': 10,
    'Fours': 20,
    'Highest_Score': '75',
    'Wickets_Taken': 15,
    'Economy_Rate': 7.8,
    'Bowling_Average': 25.3,
    'Bowling_Strike_Rate': 18.5,
    'Four_Wicket_Hauls': 1,
    'Five_Wicket_Hauls': 0,
}

DEFAULT_ORANGE_CAP = 'Virat Kohli'
DEFAULT_PURPLE_CAP = 'Jasprit Bumrah'

DEFAULT_TEAM_RANKINGS: List[Dict[str, Union[str, int]]] = [
    {'team_ranking': 'Mumbai Indians', 'RANK': 1},
    {'team_ranking': 'Chennai Super Kings', 'RANK': 2},
    {'team_ranking': 'Royal Challengers Bangalore', 'RANK': 3},
    {'team_ranking': 'Delhi Capitals', 'RANK': 4},
]
