"""
Unit tests for net document I/O.

:return : Test suite.
:return: Unit tests for reading and writing net documents.
"""

import pytest
from pathlib import Path
from pn_inheritance.documents.io import parse_net, read_net, write_net
from pn_inheritance.errors import DocumentError
from pn_inheritance.inheritance.classifier import InheritanceType, classify
from pn_inheritance.models.net import Arc, Net, Place, Transition


def test_parse_attribute_form() -> None:
    """
    Test parsing of a document with attribute values.

    :return : None.
    :return: Test assertion.
    """
    text = """
    <document>
      <place id="P1" tokens="2"/>
      <place id="P2"/>
      <transition id="T1"/>
      <arc sourceId="P1" destinationId="T1" multiplicity="2"/>
      <arc sourceId="T1" destinationId="P2"/>
    </document>
    """

    net = parse_net(text, name="doc")

    assert net.name == "doc"
    assert [(p.id, p.tokens) for p in net.places] == [("P1", 2), ("P2", 0)]
    assert net.transitions == [Transition("T1")]
    assert net.arcs == [Arc("P1", "T1", 2), Arc("T1", "P2", 1)]


def test_parse_element_form() -> None:
    text = """
    <document>
      <place><id>P1</id><tokens>1</tokens></place>
      <transition><id>T1</id></transition>
      <arc><sourceId>P1</sourceId><destinationId>T1</destinationId><multiplicity>3</multiplicity></arc>
    </document>
    """

    net = parse_net(text)

    assert net.places[0].tokens == 1
    assert net.arcs == [Arc("P1", "T1", 3)]


@pytest.mark.parametrize(
    "text",
    [
        "<document><place id='P1'></document>",
        "<document><place tokens='1'/></document>",
        "<document><place id='P1' tokens='many'/></document>",
        "<document><place id='P1' tokens='-1'/></document>",
        "<document><arc sourceId='P1' destinationId='T1' multiplicity='0'/></document>",
    ],
)
def test_parse_errors(text: str) -> None:
    with pytest.raises(DocumentError):
        parse_net(text)


def test_write_and_read(tmp_path: Path, child_with_silent_detour: Net) -> None:
    """
    Test that a written document reads back as the same net.

    :return : None.
    :return: Test assertion.
    """
    path = tmp_path / "child.xml"

    write_net(child_with_silent_detour, path)
    restored = read_net(path)

    assert restored.name == "child"
    assert restored.places == child_with_silent_detour.places
    assert [p.tokens for p in restored.places] == [1, 0]
    assert restored.arcs == child_with_silent_detour.arcs


def test_read_json(tmp_path: Path, parent_net: Net) -> None:
    path = tmp_path / "parent.json"
    parent_net.to_json(str(path))

    net = read_net(path)

    assert net == parent_net


def test_read_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DocumentError):
        read_net(tmp_path / "absent.xml")


def test_sample_documents(samples_dir: Path) -> None:
    """
    Test the bundled sample documents end to end.

    :return : None.
    :return: Test assertion.
    """
    parent = read_net(samples_dir / "parent.xml")

    assert classify(parent, read_net(samples_dir / "child_protocol.xml")) == InheritanceType.PROTOCOL
    assert classify(parent, read_net(samples_dir / "child_projection.xml")) == InheritanceType.PROJECTION
