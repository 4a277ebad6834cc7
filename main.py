"""
Simple example script to classify the sample child nets against the sample parent.

Loads the XML documents in samples/ and prints the inheritance relation of each child.
"""

from pathlib import Path
from pn_inheritance.documents.io import read_net
from pn_inheritance.inheritance.classifier import analyze


def main():
    samples = Path(__file__).parent / "samples"

    parent = read_net(samples / "parent.xml")
    print(f"Loaded parent net with {len(parent.places)} places and {len(parent.transitions)} transitions")

    reports = {}
    for name in ["child_protocol.xml", "child_projection.xml", "unbounded.xml"]:
        child = read_net(samples / name)
        report = analyze(parent, child)
        reports[name] = report

        if report.ok:
            print(f"✓ {name}: {report.result}")
        else:
            print(f"✗ {name}: analysis failed ({report.error})")

    return reports


if __name__ == "__main__":
    reports = main()
