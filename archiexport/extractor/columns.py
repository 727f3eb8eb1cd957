"""Header aliases for the table columns the extraction rules read.

Each constant is a tuple of header spellings, tried in order by
``TableRow.get``. Matching is case-insensitive.
"""

ID = ("ID", "Id", "Ref", "Req ID")
NAME = ("Name", "Title")
DESCRIPTION = ("Description", "Purpose", "Summary")
STATUS = ("Status", "Lifecycle", "State")
OWNER = ("Owner", "Team")
PRIORITY = ("Priority",)

# Stakeholders
STAKEHOLDER = ("Stakeholder", "Name", "Actor")
ROLE = ("Role",)
INTEREST = ("Interest",)
INFLUENCE = ("Influence", "Power")
CONCERN = ("Concern", "Concerns", "Key Concern", "Key Concerns")

# Principles
PRINCIPLE = ("Principle", "Name")
RATIONALE = ("Rationale", "Description")
IMPLICATIONS = ("Implications",)

# Gap analysis
BASELINE = ("Baseline", "Current State", "As-Is")
TARGET = ("Target", "Target State", "To-Be")
GAP = ("Gap",)
ACTION = ("Action", "Remediation")

# Business
CAPABILITY = ("Capability", "Business Capability")
PROCESS = ("Process", "Business Process")
FUNCTION = ("Function", "Business Function")
SCENARIO = ("Scenario",)
BUSINESS_SERVICE = ("Business Service", "Service")
BUSINESS_ACTOR = ("Business Actor", "Actor")
BUSINESS_ROLE = ("Business Role",)
OUTCOME = ("Outcome",)

# Application
COMPONENT = ("Component", "Application", "Application Component")
INTERFACES = ("Interfaces", "Interface")
DATA_OBJECT = ("Data Object", "Entity", "Data Entity")
APPLICATION_SERVICE = ("Application Service", "Service")

# Technology
PLATFORM = ("Component", "Platform", "Node")
TECHNOLOGY = ("Technology", "Product")
ENVIRONMENT = ("Environment",)
SCALING = ("Scaling",)
SLA = ("SLA",)
STANDARD = ("Standard", "Technology Standard")

# Solutions
ABB = ("ABB", "Architecture Building Block")
SBB = ("SBB", "Solution Building Block")
VENDOR = ("Vendor",)
ACQUISITION = ("Buy/Build", "Acquisition")
OPTION = ("Option",)
OPTION_KIND = ("Buy/Build", "Type")
PROS = ("Rationale", "Pros")

# Requirements
REQUIREMENT = ("Requirement", "Name", "Description", "Title")
REQUIREMENT_KIND = ("Type", "Category")
REQUIREMENT_DETAIL = ("Detail", "Acceptance Criteria", "Rationale")

# Decisions and risks
DECISION_ID = ("ID", "Decision ID")
DECISION = ("Title", "Decision", "Name")
RISK = ("Risk", "Title", "Name", "Issue")
RISK_ID = ("ID", "Risk ID", "Issue ID")
PROBABILITY = ("Probability", "Likelihood")
IMPACT = ("Impact", "Severity")
MITIGATION = ("Mitigation", "Response")

# Roadmap
WORK_PACKAGE = ("Initiative", "Work Package", "Project", "Phase", "Milestone")
TIMELINE = ("Timeline",)
QUARTER = ("Quarter",)
START = ("Start", "Start Date")
END = ("End", "End Date")

# Governance
CONTROL = ("Control", "Checkpoint", "Governance", "Review")
FREQUENCY = ("Frequency",)
