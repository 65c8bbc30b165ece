"""
Development launcher for the Close Pairs visualizer.

`python app.py` serves the page with auto-reload (unless disabled in the
settings). The installed `closepairs` command runs the same app without it.
"""

from closepairs.app import main

if __name__ in {"__main__", "__mp_main__"}:
    main(reload=True)
