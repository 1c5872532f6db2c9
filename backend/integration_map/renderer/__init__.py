from integration_map.renderer.svg_renderer import render_svg

__all__ = ["render_svg"]
