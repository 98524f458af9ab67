"""
constants.py - Layout Constants
===============================
Column positions, spacing and base colours for the three-column layout.
"""

# horizontal positions for each column
COMMAND_X = 100
EVENT_X   = 600
POLICY_X  = 1100

EVENT_STEP       = 100   # vertical gap between events of one command
VERTICAL_SPACING = 75    # gap between command bands, external events, policies

NODE_WIDTH  = 400
NODE_HEIGHT = 44
FONT_SIZE   = 16

COMMAND_FILL   = "#3b82f6"
COMMAND_BORDER = "#2563eb"
EVENT_FILL     = "#10b981"
EVENT_BORDER   = "#059669"
LINK_COLOR     = "#64748b"   # slate, command -> event edges
