"""
Main NiceGUI application for the Close Pairs visualizer.

Renders the subset sums of the first n catalog vectors as an SVG drawing with
close pair connector lines. The slider picks n, scrolling zooms, dragging
pans and "Reset View" restores the default zoom and pan.

Run with `python app.py` from the project root (auto-reload enabled) or with
the installed `closepairs` command (no reload).
"""

import asyncio
import logging

from nicegui import ui

from closepairs.catalog import MAX_N
from closepairs.close_pairs import pairs_for
from closepairs.config import get_settings, load_environment
from closepairs.handlers import RESIZE_THROTTLE, bind_surface_events, setup_viewport_handlers
from closepairs.point_generator import points_for
from closepairs.scene_builder import build_readouts, build_scene, render_svg
from closepairs.viewport import ViewportController

load_environment()
settings = get_settings()

logger = logging.getLogger(__name__)

# Forwards browser window resizes to the page as a custom event
RESIZE_SCRIPT = '''
<script>
    window.addEventListener('resize', () => {
        emitEvent('window_resize', {width: window.innerWidth, height: window.innerHeight});
    });
</script>
'''


@ui.page('/')
async def main_page():
    ui.query('body').classes('bg-slate-100')

    # --- State & Closures ---
    # One viewport and state dict per client page
    state = {
        'n': settings['initial_n'],
    }
    viewport = ViewportController()
    widgets = {}

    def refresh_scene():
        n = state['n']
        points = points_for(n)
        pairs = pairs_for(n)

        scene = build_scene(points, pairs, viewport)
        widgets['svg'].set_content(render_svg(scene))
        widgets['surface'].style(f'width: {scene["width"]}px; height: {scene["height"]}px')

        readouts = build_readouts(n, points, viewport.zoom)
        for key, text in readouts.items():
            widgets[key].set_text(text)

    def refresh_pan():
        pan_x, pan_y = viewport.pan
        widgets['pan_layer'].style(f'transform: translate({pan_x}px, {pan_y}px)')

    handlers = setup_viewport_handlers(state, viewport, refresh_scene, refresh_pan)

    # --- Layout ---
    with ui.column().classes('w-full min-h-screen items-center justify-center p-6'):
        with ui.card().classes('w-full max-w-4xl p-6 gap-4'):
            ui.label(settings['title']).classes('text-2xl font-bold text-gray-800')
            ui.label(
                'Generates Ω(n log n) close points. Use the slider to adjust the number of points, '
                'scroll to zoom, and drag to pan.'
            ).classes('text-gray-600')

            with ui.row().classes('w-full items-center gap-6 no-wrap'):
                with ui.column().classes('flex-grow gap-1'):
                    widgets['n_label'] = ui.label().classes('text-sm font-medium text-gray-700')
                    ui.slider(
                        min=0, max=MAX_N, step=1, value=state['n'],
                        on_change=handlers['on_n_change'],
                    ).classes('w-full')
                widgets['zoom'] = ui.label().classes('text-sm text-gray-600')
                ui.button('Reset View', on_click=handlers['on_reset']).props('color=primary')

            surface = ui.element('div').classes(
                'overflow-hidden rounded-lg bg-gray-50 border border-gray-200 cursor-move select-none self-center'
            )
            widgets['surface'] = surface
            with surface:
                widgets['pan_layer'] = ui.element('div')
                with widgets['pan_layer']:
                    widgets['svg'] = ui.html('', sanitize=False)
            bind_surface_events(surface, handlers)

            with ui.row().classes('w-full justify-between text-sm text-gray-600'):
                widgets['points'] = ui.label()
                widgets['close_pairs'] = ui.label()
                ui.label('Scroll to zoom, drag to pan').classes('text-gray-500')

    ui.add_body_html(RESIZE_SCRIPT)
    ui.on('window_resize', handlers['on_resize'], throttle=RESIZE_THROTTLE)

    refresh_scene()
    refresh_pan()

    # Size the surface to the browser window once the client is connected
    try:
        await ui.context.client.connected()
        size = await ui.run_javascript('return [window.innerWidth, window.innerHeight]')
    except (asyncio.TimeoutError, TimeoutError) as e:
        logger.warning(f"Could not read window size, keeping {viewport.dimensions}: {e}")
        return
    handlers['on_resize'](size)


def main(reload: bool = False):
    """
    Start the web server.

    NiceGUI can only auto-reload when the launching script runs as __main__,
    so reload is off unless the root app.py asks for it.
    """
    logging.basicConfig(
        level=settings['log_level'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    logger.info(f"Starting {settings['title']} on {settings['host']}:{settings['port']}")
    ui.run(
        title=settings['title'],
        host=settings['host'],
        port=settings['port'],
        reload=reload and settings['reload'],
    )
