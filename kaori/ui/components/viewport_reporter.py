"""
Viewport width reporter.

Streamlit has no server-side resize event, so a zero-height component
reads the browser width and reports it back as the ``vw`` query parameter.
The page only reloads when the width crosses the compact breakpoint, so
ordinary resizes within one layout cost nothing.
"""

import streamlit.components.v1 as components

from kaori.config.settings import config

WIDTH_PARAM = "vw"
RESIZE_DEBOUNCE_MS = 250


def get_viewport_reporter_html(reported_width: int = None, breakpoint: int = None) -> str:
    """Build the reporter document.

    Args:
        reported_width: Width the server currently knows about (None if never reported)
        breakpoint: Compact breakpoint in px
    """
    breakpoint = breakpoint or config.COMPACT_BREAKPOINT_PX
    reported = "null" if reported_width is None else str(int(reported_width))

    return f"""
    <script>
    (function() {{
        var host = window.parent;
        var reported = {reported};
        var breakpoint = {int(breakpoint)};
        var timer = null;

        function isCompact(width) {{ return width < breakpoint; }}

        function report() {{
            var width = host.innerWidth;
            if (reported !== null && isCompact(width) === isCompact(reported)) {{
                return;
            }}
            var url = new URL(host.location.href);
            url.searchParams.set("{WIDTH_PARAM}", String(width));
            // Navigate from the parent's own context; the component iframe is sandboxed.
            var script = host.document.createElement("script");
            script.text = "window.location.replace(" + JSON.stringify(url.toString()) + ");";
            host.document.body.appendChild(script);
        }}

        function onResize() {{
            if (timer) {{ clearTimeout(timer); }}
            timer = setTimeout(report, {RESIZE_DEBOUNCE_MS});
        }}

        try {{
            host.addEventListener("resize", onResize);
            window.addEventListener("unload", function() {{
                host.removeEventListener("resize", onResize);
            }});
            report();
        }} catch (e) {{
            console.warn("Kaori viewport reporter disabled:", e);
        }}
    }})();
    </script>
    """


def render_viewport_reporter(reported_width: int = None, breakpoint: int = None) -> None:
    """Embed the reporter (renders nothing visible)."""
    components.html(get_viewport_reporter_html(reported_width, breakpoint), height=0)
