"""Starter acceptance-criteria sets for common feature areas."""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .models import CriteriaFormat


class CriteriaTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    format: CriteriaFormat
    criteria: Tuple[str, ...]


def _templates(fmt: CriteriaFormat, rows) -> Tuple[CriteriaTemplate, ...]:
    return tuple(
        CriteriaTemplate(id=template_id, label=label, format=fmt, criteria=tuple(criteria))
        for template_id, label, criteria in rows
    )


GHERKIN_TEMPLATES = _templates(CriteriaFormat.GHERKIN, [
    ("gui", "GUI Changes", [
        "Given I am on the target screen\nWhen I perform the UI action\nThen the expected visual state is shown",
        "Given the UI is loading data\nWhen the request is in progress\nThen I see an accessible loading indicator",
        "Given an invalid UI input\nWhen I submit the form\nThen I see a clear validation message next to the field",
    ]),
    ("api", "API / Backend", [
        "Given a valid request payload\nWhen the API endpoint is called\nThen the server returns a 2xx response with the expected schema",
        "Given a request with missing required fields\nWhen the API endpoint is called\nThen the server returns a 4xx error with validation details",
        "Given an authenticated user without required permissions\nWhen they call the endpoint\nThen the server returns an authorization error",
    ]),
    ("database", "Database Features", [
        "Given a valid create operation\nWhen data is saved\nThen a new record is persisted with all required fields",
        "Given an update operation\nWhen a record is modified\nThen only the targeted fields are changed and the audit timestamp is updated",
        "Given a foreign key constraint\nWhen invalid related data is submitted\nThen the transaction is rejected and no partial write occurs",
    ]),
    ("auth", "Authentication & Access", [
        "Given a registered user with valid credentials\nWhen they sign in\nThen they are redirected to the authorized landing page",
        "Given a user enters invalid credentials\nWhen they submit the sign-in form\nThen they see an authentication error without exposing sensitive details",
        "Given a user lacks required role permissions\nWhen they attempt a restricted action\nThen access is denied and the action is not executed",
    ]),
    ("search", "Search & Filtering", [
        "Given a dataset is available\nWhen I enter a search term\nThen results show only matching records",
        "Given filters are applied\nWhen I combine multiple filter values\nThen the results satisfy all selected filters",
        "Given no records match the query\nWhen the search is executed\nThen an empty-state message is shown with guidance",
    ]),
    ("notifications", "Notifications", [
        "Given a business event triggers a notification\nWhen processing completes\nThen the user receives the correct in-app or email message",
        "Given notification preferences are configured\nWhen an event occurs\nThen delivery follows the selected channels and timing rules",
        "Given notification delivery fails\nWhen retries are attempted\nThen failure is logged and the user is not sent duplicate messages",
    ]),
    ("reporting", "Reporting & Export", [
        "Given report filters are selected\nWhen I generate a report\nThen totals and records reflect the selected filters",
        "Given report data is displayed\nWhen I export to CSV\nThen the file includes expected columns in the correct order",
        "Given report generation exceeds a normal wait time\nWhen I request the report\nThen I receive progress feedback and completion status",
    ]),
    ("workflow", "Workflow & Approvals", [
        "Given a request is submitted\nWhen workflow rules are evaluated\nThen the request is routed to the correct approver",
        "Given an approver rejects a request\nWhen they provide a reason\nThen the requester sees the rejection reason and updated status",
        "Given a request is approved\nWhen final approval is completed\nThen downstream actions are triggered and status is marked complete",
    ]),
])

BULLET_TEMPLATES = _templates(CriteriaFormat.BULLET, [
    ("gui", "GUI Changes", [
        "The user can complete the primary UI flow using visible and labeled controls.",
        "The system must show a loading state while UI data is being fetched.",
        "The system must display clear inline validation for invalid user input.",
    ]),
    ("api", "API / Backend", [
        "The system must return a successful 2xx response with the documented payload for valid API requests.",
        "The system must return a 4xx response with actionable validation errors for invalid input.",
        "The system must enforce authentication and authorization before protected backend operations.",
    ]),
    ("database", "Database Features", [
        "The system must persist valid records with all required database fields.",
        "The system must maintain data integrity by enforcing uniqueness and relational constraints.",
        "The system must roll back partial writes when a transaction fails.",
    ]),
    ("auth", "Authentication & Access", [
        "The user can sign in with valid credentials and reach the correct authorized landing page.",
        "The system must deny access to protected actions when the user lacks required permissions.",
        "The system must show clear sign-in errors without exposing sensitive security information.",
    ]),
    ("search", "Search & Filtering", [
        "The user can search records and only matching results are displayed.",
        "The user can apply multiple filters and the system must combine them correctly.",
        "The system must display a helpful empty state when no search results are found.",
    ]),
    ("notifications", "Notifications", [
        "The system must send notifications when configured business events occur.",
        "The user can manage notification channel preferences and delivery follows those settings.",
        "The system must prevent duplicate notifications during retry or failure handling.",
    ]),
    ("reporting", "Reporting & Export", [
        "The user can generate reports that reflect selected date ranges and filters.",
        "The user can export report results and the file must contain expected columns and values.",
        "The system must provide progress or completion feedback for long-running report generation.",
    ]),
    ("workflow", "Workflow & Approvals", [
        "The system must route submitted requests to approvers based on configured workflow rules.",
        "The user can approve or reject requests and a reason is captured for rejected items.",
        "The system must update workflow status history for each approval decision.",
    ]),
])

TEMPLATES: Dict[CriteriaFormat, Tuple[CriteriaTemplate, ...]] = {
    CriteriaFormat.GHERKIN: GHERKIN_TEMPLATES,
    CriteriaFormat.BULLET: BULLET_TEMPLATES,
}


def list_templates(fmt=CriteriaFormat.GHERKIN) -> List[CriteriaTemplate]:
    return list(TEMPLATES[CriteriaFormat.parse(fmt)])


def get_template(fmt, template_id: str) -> Optional[CriteriaTemplate]:
    for template in TEMPLATES[CriteriaFormat.parse(fmt)]:
        if template.id == template_id:
            return template
    return None
