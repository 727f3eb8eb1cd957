"""Technology element type inference from component names.

Rules are tried in order and the first keyword hit wins, so a name like
"Kubernetes Cluster" is SystemSoftware (rule 1) even though "cluster"
also appears in the Node rule. Keywords match whole words only.
"""

from __future__ import annotations

import re

from archiexport.model import ElementType

_TECH_RULES: list[tuple[ElementType, list[str]]] = [
    (ElementType.SYSTEM_SOFTWARE, [
        "database", "databases", "db", "dbms", "postgres", "postgresql", "mysql",
        "mariadb", "oracle", "sql", "mongo", "mongodb", "redis", "dynamodb",
        "cosmosdb", "cassandra", "rds", "kubernetes", "k8s", "docker",
        "container", "containers", "runtime", "nodejs", "jvm",
        "operating system", "linux",
    ]),
    (ElementType.NODE, [
        "node", "nodes", "cluster", "compute", "vm", "virtual machine",
        "instance", "instances", "ec2", "host", "hosts",
    ]),
    (ElementType.DEVICE, [
        "server", "servers", "device", "devices", "appliance", "hardware",
        "mainframe", "workstation", "laptop", "desktop", "mobile", "phone",
        "tablet", "sensor", "router", "printer", "kiosk",
    ]),
    (ElementType.COMMUNICATION_NETWORK, [
        "network", "vpc", "subnet", "lan", "wan", "vpn", "firewall", "dns",
    ]),
    (ElementType.TECHNOLOGY_SERVICE, [
        "api", "gateway", "load balancer", "cdn", "cloudfront", "queue",
        "storage", "serverless",
    ]),
]

DEFAULT_TECHNOLOGY_TYPE = ElementType.NODE


def _compile(keywords: list[str]) -> re.Pattern[str]:
    alternation = "|".join(
        r"[\s_-]+".join(re.escape(part) for part in k.split()) for k in keywords
    )
    return re.compile(rf"(?<![a-z0-9])(?:{alternation})(?![a-z0-9])")


_COMPILED: list[tuple[ElementType, re.Pattern[str]]] = [
    (element_type, _compile(keywords)) for element_type, keywords in _TECH_RULES
]


def match_technology_type(text: str) -> ElementType | None:
    """Type from the first rule with a keyword in *text*, or None."""
    lowered = text.lower()
    for element_type, pattern in _COMPILED:
        if pattern.search(lowered):
            return element_type
    return None


def infer_technology_type(name: str, technology: str = "") -> ElementType:
    """Infer from the name, then the technology cell, defaulting to Node."""
    return (
        match_technology_type(name)
        or match_technology_type(technology)
        or DEFAULT_TECHNOLOGY_TYPE
    )
