"""
Static SVG export of a diagram projection.

Nodes are drawn as rounded boxes of their visual width, edges as straight
lines between box centres with a single arrowhead in the edge color.
Edges whose endpoints are not on the diagram are skipped, the same way
the interactive renderer skips them.
"""

from datetime import date
from typing import Dict, List, Optional
from xml.sax.saxutils import escape, quoteattr

from integration_map.visual.visual_schema import (
    DiagramEdge,
    DiagramNode,
    DiagramProjection,
    PresentationOptions,
)
from integration_map.visual.visual_style import QUALITY_LEGEND, QUALITY_STYLE

NODE_HEIGHT = 40
MARGIN = 40
HEADER_HEIGHT = 110
LEGEND_WIDTH = 270
LEGEND_ROW = 40


def _marker_id(color: str) -> str:
    return "arrow-" + color.lstrip("#")


def _format_date(day: date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


def _header(projection: DiagramProjection, options: PresentationOptions,
            width: float, generated_on: date) -> List[str]:
    subtitle = options.subtitle or (
        f"{len(projection.nodes)} Systems and {len(projection.edges)} Connections"
    )
    cx = width / 2
    return [
        f'<text x="{cx}" y="{MARGIN}" text-anchor="middle" font-size="24" '
        f'font-weight="bold" fill="#111827">{escape(options.title)}</text>',
        f'<text x="{cx}" y="{MARGIN + 30}" text-anchor="middle" font-size="16" '
        f'fill="#4B5563">{escape(subtitle)}</text>',
        f'<text x="{cx}" y="{MARGIN + 55}" text-anchor="middle" font-size="12" '
        f'fill="#6B7280">Generated on: {escape(_format_date(generated_on))}</text>',
    ]


def _legend(x: float, y: float) -> List[str]:
    height = LEGEND_ROW * len(QUALITY_LEGEND) + 10
    svg = [
        f'<g class="legend" transform="translate({x}, {y})">',
        f'<rect x="-10" y="-10" width="{LEGEND_WIDTH}" height="{height}" rx="5" ry="5" '
        f'fill="white" stroke="#e5e7eb" stroke-width="1"/>',
    ]
    for row, (quality, entry) in enumerate(QUALITY_LEGEND.items()):
        color = QUALITY_STYLE[quality]["color"]
        top = row * LEGEND_ROW
        svg.append(
            f'<line x1="0" y1="{top}" x2="30" y2="{top}" stroke="{color}" stroke-width="3"/>'
        )
        svg.append(
            f'<text x="40" y="{top + 4}" font-size="12" font-weight="bold" '
            f'fill="#374151">{escape(entry["label"])}</text>'
        )
        svg.append(
            f'<text x="40" y="{top + 22}" font-size="10" '
            f'fill="#6B7280">{escape(entry["description"])}</text>'
        )
    svg.append("</g>")
    return svg


def _edge(edge: DiagramEdge, src: DiagramNode, dst: DiagramNode,
          dx: float, dy: float) -> List[str]:
    x1 = src.position.x + src.visual_width / 2 + dx
    y1 = src.position.y + NODE_HEIGHT / 2 + dy
    x2 = dst.position.x + dst.visual_width / 2 + dx
    y2 = dst.position.y + NODE_HEIGHT / 2 + dy

    dash = ' stroke-dasharray="6 4"' if edge.animated else ""
    svg = [
        f'<line id={quoteattr(edge.id)} x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
        f'stroke="{edge.color}" stroke-width="{edge.stroke_width}"{dash} '
        f'marker-end="url(#{_marker_id(edge.color)})"/>'
    ]
    if edge.label:
        svg.append(
            f'<text x="{(x1 + x2) / 2}" y="{(y1 + y2) / 2}" text-anchor="middle" '
            f'font-size="12" fill="#555">{escape(edge.label)}</text>'
        )
    return svg


def render_svg(
    projection: DiagramProjection,
    options: Optional[PresentationOptions] = None,
    generated_on: Optional[date] = None,
) -> str:
    options = options or PresentationOptions()
    generated_on = generated_on or date.today()

    content_w = max((n.position.x + n.visual_width for n in projection.nodes), default=0)
    content_h = max((n.position.y + NODE_HEIGHT for n in projection.nodes), default=0)

    dx = MARGIN
    dy = MARGIN + (HEADER_HEIGHT if options.show_export_labels else 0)
    legend_y = dy + content_h + MARGIN

    w = max(content_w, LEGEND_WIDTH) + 2 * MARGIN
    h = legend_y + LEGEND_ROW * len(QUALITY_LEGEND) + MARGIN

    svg = [
        f'<svg width="{w}" height="{h}" xmlns="http://www.w3.org/2000/svg">'
    ]

    colors = sorted({e.color for e in projection.edges})
    if colors:
        svg.append("<defs>")
        for color in colors:
            svg.append(
                f'<marker id="{_marker_id(color)}" viewBox="0 -5 10 10" refX="10" refY="0" '
                f'markerWidth="6" markerHeight="6" orient="auto">'
                f'<path d="M0,-5L10,0L0,5" fill="{color}"/></marker>'
            )
        svg.append("</defs>")

    if options.show_export_labels:
        svg.extend(_header(projection, options, w, generated_on))

    # Draw edges first
    node_map: Dict[str, DiagramNode] = {n.id: n for n in projection.nodes}

    for e in projection.edges:
        src = node_map.get(e.source)
        dst = node_map.get(e.target)
        if src is None or dst is None:
            continue
        svg.extend(_edge(e, src, dst, dx, dy))

    # Draw nodes
    for n in projection.nodes:
        x = n.position.x + dx
        y = n.position.y + dy
        svg.append(
            f'<rect x="{x}" y="{y}" width="{n.visual_width}" height="{NODE_HEIGHT}" '
            f'rx="8" ry="8" fill="{n.color}"/>'
        )
        svg.append(
            f'<text x="{x + n.visual_width / 2}" y="{y + NODE_HEIGHT / 2}" '
            f'text-anchor="middle" dominant-baseline="middle" '
            f'font-family="Arial" font-size="14" font-weight="600" fill="white">'
            f'{escape(n.label)}</text>'
        )

    svg.extend(_legend(MARGIN + 10, legend_y))
    svg.append("</svg>")
    return "\n".join(svg)
