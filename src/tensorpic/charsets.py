# Monochrome density ramp, sparse to dense
DENSITY_RAMP = " .:-=+*#%@"

# Half blocks for truecolor output: two source rows per terminal line
LOWER_HALF_BLOCK = "▄"
UPPER_HALF_BLOCK = "▀"

# Box drawing characters; the vertical bar leads every header, the rest frame colour blocks
BORDER_TOP_LEFT = "╔"
BORDER_BOTTOM_LEFT = "╚"
BORDER_HORIZONTAL = "═"
BORDER_VERTICAL = "║"

EMPTY_MARKER = "<empty>"
