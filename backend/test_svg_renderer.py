from datetime import date

from integration_map.renderer import render_svg
from integration_map.topology import Connection, System, Topology
from integration_map.visual import PresentationOptions, project_topology


def make_projection(connections=None):
    topology = Topology(
        systems=[System(id="ehr", name="EHR"), System(id="lab", name="Lab <Core>")],
        connections=connections if connections is not None else [
            Connection(source="ehr", target="lab", quality="automated", volume=100),
        ],
    )
    return project_topology(topology, PresentationOptions(show_export_labels=True))


def test_svg_draws_nodes_edges_and_legend():
    svg = render_svg(make_projection(), PresentationOptions(show_export_labels=False))

    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert svg.count("<rect") == 3  # two nodes + legend background
    assert 'id="e0"' in svg
    assert 'stroke="#4ade80"' in svg
    assert 'marker-end="url(#arrow-4ade80)"' in svg
    assert "Automatic Data Flow" in svg
    assert "Generated on" not in svg


def test_svg_escapes_labels():
    svg = render_svg(make_projection())
    assert "Lab &lt;Core&gt;" in svg
    assert "Lab <Core>" not in svg


def test_export_header_has_title_counts_and_date():
    options = PresentationOptions(title="Hospital Map", show_export_labels=True)

    svg = render_svg(make_projection(), options, generated_on=date(2024, 3, 5))

    assert "Hospital Map" in svg
    assert "2 Systems and 1 Connections" in svg
    assert "Generated on: March 5, 2024" in svg
    assert ">HL7 FHIR</text>" in svg


def test_explicit_subtitle_replaces_counts():
    options = PresentationOptions(subtitle="Lab workflows", show_export_labels=True)
    svg = render_svg(make_projection(), options, generated_on=date(2024, 1, 1))

    assert "Lab workflows" in svg
    assert "Systems and" not in svg


def test_dangling_edges_are_skipped():
    projection = make_projection([
        Connection(source="ehr", target="pacs", quality="manual"),
    ])

    svg = render_svg(projection, PresentationOptions(show_export_labels=False))

    assert "<line id=" not in svg


def test_empty_projection_still_renders():
    svg = render_svg(project_topology(Topology()))
    assert "<defs>" not in svg
    assert "Fully Manual Process" in svg
