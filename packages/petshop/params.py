"""
Game parameters for the first shop turn of the free-to-play pack.

Prices and slot counts are fixed for turn one; later turns add shop slots
and tiers, which this model does not cover.
"""

# Team layout
TEAM_SIZE = 5

# Shop layout
SHOP_FRIEND_COUNT = 3
SHOP_FOOD_COUNT = 1

# Economy
STARTING_GOLD = 10
FRIEND_COST = 3
FOOD_COST = 3
REROLL_COST = 1
