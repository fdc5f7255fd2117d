# Define a static color class for consistent use across the app


class Colors:
    # Surfaces (Zinc, dark theme)
    surface = "#18181b"  # Zinc 900
    grid = "#27272a"  # Zinc 800
    axis = "#d4d4d8"  # Zinc 300

    # Accent (trend line)
    indigo = "#6366f1"  # Indigo 500

    # Semantic: Success (cleared queries)
    green = "#4ade80"  # Green 400


TREND_LINE_COLOR = Colors.indigo
CLEARED_COLOR = Colors.green
