"""
Net document I/O utilities.

Reads and writes nets stored as XML documents of the form

    <document>
      <place id="P1" tokens="1"/>
      <transition id="T1"/>
      <arc sourceId="P1" destinationId="T1" multiplicity="1"/>
    </document>

Values may also be given as child elements (<place><id>P1</id><tokens>1</tokens></place>).
JSON files written by Net.to_json and PNML files (through pm4py) are accepted as well.

:return : Document I/O functions.
:return: Functions for reading and writing net documents.
"""

from pathlib import Path
from typing import Optional, Union
import xml.etree.ElementTree as ET
from pn_inheritance.errors import DocumentError, MalformedModel
from pn_inheritance.models.net import Arc, Net, Place, Transition


def _value(elem: ET.Element, name: str, default: Optional[str] = None) -> Optional[str]:
    value = elem.get(name)
    if value is None:
        child = elem.find(name)
        if child is not None and child.text is not None:
            value = child.text.strip()
    return value if value is not None else default


def _required(elem: ET.Element, name: str) -> str:
    value = _value(elem, name)
    if value is None or value == "":
        raise DocumentError(f"<{elem.tag}> element without {name}")
    return value


def _integer(elem: ET.Element, name: str, default: int) -> int:
    raw = _value(elem, name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise DocumentError(f"<{elem.tag}> has non-integer {name} {raw!r}") from e


def parse_net(text: str, name: Optional[str] = None) -> Net:
    """
    Parse a net from XML text.

    :param text: XML document.
    :param name: Name given to the net.
    :return : Net instance.
    :return: Net with places, transitions and arcs of the document.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise DocumentError(f"Invalid net document: {e}") from e

    try:
        places = [
            Place(id=_required(e, "id"), tokens=_integer(e, "tokens", 0))
            for e in root.iter("place")
        ]
        transitions = [Transition(id=_required(e, "id")) for e in root.iter("transition")]
        arcs = [
            Arc(
                source_id=_required(e, "sourceId"),
                destination_id=_required(e, "destinationId"),
                multiplicity=_integer(e, "multiplicity", 1),
            )
            for e in root.iter("arc")
        ]
    except MalformedModel as e:
        raise DocumentError(f"Invalid net document: {e}") from e

    return Net(places=places, transitions=transitions, arcs=arcs, name=name)


def read_net(filepath: Union[str, Path]) -> Net:
    """
    Read a net from an XML, JSON or PNML file.

    :param filepath: Path to net file (.xml, .json or .pnml).
    :return : Net instance.
    :return: Loaded net named after the file stem.
    """
    path = Path(filepath)
    if path.suffix.lower() == ".pnml":
        from pn_inheritance.integration.pm4py_adapter import import_pnml

        return import_pnml(str(path))

    try:
        if path.suffix.lower() == ".json":
            net = Net.from_json(str(path))
            if net.name is None:
                net.name = path.stem
            return net
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Cannot read net document {path}: {e}") from e
    except (KeyError, TypeError, ValueError) as e:
        raise DocumentError(f"Invalid net document {path}: {e}") from e

    return parse_net(text, name=path.stem)


def write_net(net: Net, filepath: Union[str, Path]) -> None:
    """
    Write a net as an XML document.

    :param net: Net to write.
    :param filepath: Output file path.
    :return : None.
    :return: File write side-effect.
    """
    root = ET.Element("document")
    for place in net.places:
        ET.SubElement(root, "place", {"id": place.id, "tokens": str(place.tokens)})
    for transition in net.transitions:
        ET.SubElement(root, "transition", {"id": transition.id})
    for arc in net.arcs:
        ET.SubElement(
            root,
            "arc",
            {
                "sourceId": arc.source_id,
                "destinationId": arc.destination_id,
                "multiplicity": str(arc.multiplicity),
            },
        )

    tree = ET.ElementTree(root)
    tree.write(str(filepath), encoding="utf-8", xml_declaration=True)
