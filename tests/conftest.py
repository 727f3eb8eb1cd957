"""Shared test fixtures for archiexport."""

import pytest

from archiexport.config.models import ArchiExportConfig
from archiexport.extractor import extract_model
from archiexport.migration import classify_migration
from archiexport.parsing import Document

EXPORTED_AT = "2026-01-15T09:30:00+00:00"


STAKEHOLDERS = Document(
    name="A2_Stakeholder_Map.md",
    content="""---
togaf_phase: A
artifact_type: catalog
version: 0.1.0
status: draft
---
# Stakeholder Map

| Stakeholder | Role | Interest | Concern | Influence |
|-------------|------|----------|---------|-----------|
| CTO | Executive | High | Scalability | High |
| Product Owner | Business | Medium | Features | Medium |
""",
)

PRINCIPLES = Document(
    name="P1_Architecture_Principles.md",
    content="""---
togaf_phase: Preliminary
artifact_type: catalog
version: 0.1.0
status: draft
---
# Architecture Principles

| ID | Principle | Rationale | Implications |
|----|-----------|-----------|--------------|
| P-01 | Cloud-First | Reduce on-premises costs | All new services deployed to cloud |
| P-02 | API-Driven | Enable integration | Every service must expose REST APIs |
""",
)

BUSINESS = Document(
    name="B1_Business_Architecture.md",
    content="""---
togaf_phase: B
artifact_type: deliverable
version: 0.1.0
status: draft
---
# Business Architecture

## Business Processes

| Process | Description |
|---------|-------------|
| User Onboarding | New user registration flow |
| Order Processing | End-to-end order lifecycle |

## Gap Analysis

| Baseline | Target | Gap | Action |
|----------|--------|-----|--------|
| Manual onboarding | Automated onboarding | No automation | Implement self-service portal |
""",
)

APPLICATION = Document(
    name="C1_Application_Architecture.md",
    content="""---
togaf_phase: C
artifact_type: deliverable
version: 0.1.0
status: draft
---
# Application Architecture

## Target Components

| Component | Purpose | Interfaces | Owner |
|-----------|---------|------------|-------|
| API Gateway | Central entry point | REST API, GraphQL | Platform Team |
| User Service | Manage users | REST API | Identity Team |
| Order Service | Process orders | REST API, Events | Commerce Team |

```mermaid
graph TD
    GW[API Gateway] --> US[User Service]
    GW --> OS[Order Service]
    US -->|events| OS
```
""",
)

TECHNOLOGY = Document(
    name="D1_Technology_Architecture.md",
    content="""---
togaf_phase: D
artifact_type: deliverable
version: 0.1.0
status: draft
---
# Technology Architecture

## Platform Components

| Component | Technology | Environment | Scaling | SLA |
|-----------|-----------|-------------|---------|-----|
| Kubernetes Cluster | EKS | Production | Auto-scaling | 99.9% |
| PostgreSQL Database | RDS | Production | Read replicas | 99.95% |
| API Gateway | Kong | Production | Horizontal | 99.9% |
""",
)

SOLUTIONS = Document(
    name="E1_Solutions_Building_Blocks.md",
    content="""---
togaf_phase: E
artifact_type: catalog
version: 0.1.0
status: draft
---
# Solutions Building Blocks

## ABB to SBB Mapping

| ABB | SBB | Vendor | Buy/Build | Status |
|-----|-----|--------|-----------|--------|
| Identity Provider | Auth0 | Auth0 Inc | Buy | Active |
| Container Platform | EKS | AWS | Buy | Active |
| API Management | Kong Gateway | Kong Inc | Buy | Evaluating |
""",
)

REQUIREMENTS = Document(
    name="R1_Architecture_Requirements.md",
    content="""---
togaf_phase: Requirements
artifact_type: catalog
version: 0.1.0
status: draft
---
# Architecture Requirements

## Functional Requirements

| ID | Requirement | Priority | Status |
|----|-------------|----------|--------|
| FR-01 | Single sign-on for all services | High | Approved |
| FR-02 | Real-time order tracking | Medium | Draft |

## Non-Functional Requirements

| ID | Requirement | Category | Target |
|----|-------------|----------|--------|
| NFR-01 | Response time | NFR | p95 < 2s |
| NFR-02 | Availability | NFR | 99.9% |
""",
)

DECISIONS = Document(
    name="X1_ADR_Decision_Log.md",
    content="""---
togaf_phase: Cross-Phase
artifact_type: deliverable
version: 0.1.0
status: draft
---
# ADR Decision Log

## AD-01: Container Orchestration Platform

**Status**: Decided

Selected Kubernetes (EKS) for container orchestration.

## AD-02: API Gateway Selection

**Status**: Open

Evaluating Kong vs AWS API Gateway.
""",
)

RISKS = Document(
    name="X2_Risk_Issue_Register.md",
    content="""---
togaf_phase: Cross-Phase
artifact_type: catalog
version: 0.1.0
status: draft
---
# Risk Register

| Risk | Probability | Impact | Mitigation | Owner |
|------|------------|--------|------------|-------|
| Vendor lock-in | Medium | High | Multi-cloud strategy | CTO |
| Skill gap | High | Medium | Training programme | HR |
""",
)

VAULT_DOCUMENTS = [
    STAKEHOLDERS,
    PRINCIPLES,
    BUSINESS,
    APPLICATION,
    TECHNOLOGY,
    SOLUTIONS,
    REQUIREMENTS,
    DECISIONS,
    RISKS,
]


# -- migration vault: explicit retire/new markers and a baseline-only process --

MIGRATION_BUSINESS = Document(
    name="B1_Business_Architecture.md",
    content="""---
togaf_phase: B
---
# Business Architecture

## Business Processes

| Process | Description |
|---------|-------------|
| User Onboarding | New user registration flow |
| Order Processing | End-to-end order lifecycle |
| Legacy Billing | Old billing system |

## Gap Analysis

| Baseline | Target | Gap | Action |
|----------|--------|-----|--------|
| Manual onboarding | Automated onboarding | No automation | Implement self-service portal |
| Legacy Billing | Modern Billing | Outdated billing system | Replace with cloud billing |
""",
)

MIGRATION_APPLICATION = Document(
    name="C1_Application_Architecture.md",
    content="""---
togaf_phase: C
---
# Application Architecture

## Application Portfolio

| Component | Purpose | Status |
|-----------|---------|--------|
| API Gateway | Route requests | Active |
| Legacy CRM | Customer management | Retire |
| AI Assistant | Intelligent support | New |
| User Portal | Self-service | Active |

## Data Flow

```mermaid
graph TD
  APIGateway["API Gateway"] --> UserPortal["User Portal"]
  APIGateway --> AIAssistant["AI Assistant"]
  UserPortal --> DB["Database"]
```
""",
)

MIGRATION_TECHNOLOGY = Document(
    name="D1_Technology_Architecture.md",
    content="""---
togaf_phase: D
---
# Technology Architecture

| Component | Technology | Status |
|-----------|-----------|--------|
| Kubernetes Cluster | K8s | Active |
| On-Prem Server | Physical | Retire |
| Cloud CDN | CloudFront | Planned |
""",
)

MIGRATION_ROADMAP = Document(
    name="F1_Architecture_Roadmap.md",
    content="""---
togaf_phase: F
---
# Architecture Roadmap

| Initiative | Timeline | Status |
|-----------|----------|--------|
| Phase 1: Foundation | Q1 2026 | In Progress |
| Phase 2: Migration | Q2 2026 | Planned |
""",
)

MIGRATION_PRINCIPLES = Document(
    name="P1_Architecture_Principles.md",
    content="""---
togaf_phase: Preliminary
---
# Architecture Principles

| ID | Principle | Rationale |
|----|-----------|-----------|
| P-01 | Cloud-First | Reduce on-prem costs |
""",
)

MIGRATION_DOCUMENTS = [
    MIGRATION_BUSINESS,
    MIGRATION_APPLICATION,
    MIGRATION_TECHNOLOGY,
    MIGRATION_ROADMAP,
    MIGRATION_PRINCIPLES,
]


@pytest.fixture
def sample_config():
    return ArchiExportConfig()


@pytest.fixture
def vault_documents():
    return list(VAULT_DOCUMENTS)


@pytest.fixture
def migration_documents():
    return list(MIGRATION_DOCUMENTS)


@pytest.fixture
def vault_model(vault_documents):
    return extract_model(vault_documents, "TestVault", exported_at=EXPORTED_AT)


@pytest.fixture
def migration_model(migration_documents):
    return extract_model(migration_documents, "MigrationVault", exported_at=EXPORTED_AT)


@pytest.fixture
def classified_migration(migration_model, migration_documents):
    return classify_migration(migration_model, migration_documents)


@pytest.fixture
def vault_dir(tmp_path):
    """The sample vault written to disk, plus a hidden directory that must be ignored."""
    root = tmp_path / "vault"
    root.mkdir()
    for doc in VAULT_DOCUMENTS:
        (root / doc.name).write_text(doc.content, encoding="utf-8")
    hidden = root / ".obsidian"
    hidden.mkdir()
    (hidden / "workspace.md").write_text("| Component |\n|---|\n| Hidden |\n", encoding="utf-8")
    return root


@pytest.fixture
def migration_vault_dir(tmp_path):
    root = tmp_path / "migration-vault"
    root.mkdir()
    for doc in MIGRATION_DOCUMENTS:
        (root / doc.name).write_text(doc.content, encoding="utf-8")
    return root
