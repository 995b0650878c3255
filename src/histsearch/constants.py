# Search results
MAX_CANDIDATES = 10  # Rows shown below the search line

# Screen layout
HEADER = "Type your search query. Use ↑/↓ to select. Press Enter to choose. (Esc to exit)"
SEARCH_PREFIX = "Search: "
SELECTED_MARKER = "> "
UNSELECTED_MARKER = "  "

# curses waits this long after ESC to see if an escape sequence follows
ESC_DELAY_MS = 25

# Debug logging
DEBUG_LOG_FILE = "histsearch_debug.log"

# Exit notices
NO_MATCH_NOTICE = "No matching commands found."
CANCELLED_NOTICE = "Exited."
