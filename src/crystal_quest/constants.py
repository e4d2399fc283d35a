GRID_SIZE = 8

# Crystal kinds in spawn order, paired with the glyph the presentation layer draws.
CRYSTAL_KINDS = ('amber', 'sapphire', 'topaz', 'emerald', 'ruby', 'amethyst')
CRYSTAL_GLYPHS = {
    'amber': '🔶',
    'sapphire': '🔷',
    'topaz': '🟨',
    'emerald': '🟩',
    'ruby': '🟥',
    'amethyst': '🟪',
}

MIN_MATCH_LENGTH = 3
INITIAL_MOVES = 15

# Scoring: every matched cell is worth POINTS_PER_CELL; cascade iteration i >= 2 adds i * COMBO_BONUS_PER_LEVEL.
POINTS_PER_CELL = 10
COMBO_BONUS_PER_LEVEL = 5

# Leaderboard limits
NICKNAME_MAX_LENGTH = 20
NICKNAME_MIN_LENGTH = 2
MAX_SUBMITTED_SCORE = 1_000_000
LEADERBOARD_SIZE = 20

SHARE_COMPOSE_URL = "https://warpcast.com/~/compose"
