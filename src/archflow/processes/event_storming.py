"""
Event storming workshop.

Collaborative discovery of domain events, commands, actors, aggregates,
policies and bounded contexts, ending in a domain model, a context map
and a quality gate on the model.
"""

from typing import Any

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessInputs, process
from archflow.domain.tasks import TaskTemplate
from archflow.processes.common import (
    NUMBER,
    OBJECT,
    OBJECTS,
    SCORE,
    STRING,
    STRINGS,
    array_of,
    phase_task,
    run_metadata,
    schema,
)

PROCESS_ID = "software-architecture/event-storming"
TARGET_QUALITY = 85


def _storming_task(task_id: str, *, label: str, **kwargs: Any) -> TaskTemplate:
    return phase_task(
        task_id,
        labels=["agent", "event-storming", label, "software-architecture"],
        **kwargs,
    )


EVENT = {
    "type": "object",
    "properties": {
        "name": STRING,
        "description": STRING,
        "sequence": NUMBER,
        "trigger": STRING,
        "hotspot": {"type": "boolean"},
    },
}

prepare_workshop_task = _storming_task(
    "prepare-workshop",
    title="Prepare Event Storming Workshop: {domain}",
    agent_name="workshop-facilitator",
    role="Expert Event Storming facilitator and Domain-Driven Design practitioner",
    task="Prepare comprehensive workshop materials for an Event Storming session",
    instructions=[
        "Create a workshop agenda with time allocations for each phase",
        "Prepare a participant guide explaining Event Storming principles and notation",
        "Define domain scope and boundaries for the session",
        "List required materials (orange events, blue commands, yellow actors, "
        "large aggregates, pink policies)",
        "Prepare example events from the domain to seed discussion",
        "Create ground rules for collaborative exploration",
    ],
    output_format=(
        "JSON with agenda, participantGuide, materials, exampleEvents, groundRules"
    ),
    output_schema=schema(
        ["agenda", "participantGuide", "materials"],
        agenda=array_of(phase=STRING, duration=NUMBER, activities=STRINGS),
        participantGuide=STRING,
        materials=STRINGS,
        exampleEvents=STRINGS,
        groundRules=STRINGS,
    ),
    label="preparation",
)

chaotic_exploration_task = _storming_task(
    "chaotic-exploration",
    title="Chaotic Exploration - Discover Domain Events",
    agent_name="domain-explorer",
    role="Domain expert facilitating rapid event discovery",
    task=(
        "Facilitate chaotic exploration phase to discover all significant domain "
        "events"
    ),
    instructions=[
        "Generate domain events as past-tense facts (OrderPlaced, PaymentReceived)",
        "Favour quantity over precision: capture everything that happens",
        "Mark hotspots where participants disagree or knowledge is missing",
        "Cover happy paths, failure paths and edge cases",
    ],
    output_format="JSON with events (array of name, description, hotspot), hotspots",
    output_schema=schema(
        ["events"], events={"type": "array", "items": EVENT}, hotspots=STRINGS
    ),
    label="exploration",
)

enforce_timeline_task = _storming_task(
    "enforce-timeline",
    title="Enforce Timeline - Refine Event Ordering",
    agent_name="timeline-organizer",
    role="Process analyst organizing domain events chronologically",
    task="Refine and enforce chronological ordering of domain events",
    instructions=[
        "Order events along a single timeline and assign sequence numbers",
        "Merge duplicates and split events that hide several facts",
        "Identify pivotal events that mark phase transitions",
        "Identify parallel flows and swimlanes",
    ],
    output_format=(
        "JSON with ordered events (array with sequence), pivotalEvents, swimlanes"
    ),
    output_schema=schema(
        ["events"],
        events={"type": "array", "items": EVENT},
        pivotalEvents=STRINGS,
        swimlanes=STRINGS,
    ),
    label="timeline",
)

identify_commands_task = _storming_task(
    "identify-commands",
    title="Identify Commands - Triggers for Events",
    agent_name="command-identifier",
    role="Domain modeler identifying commands and triggers",
    task="Identify commands that trigger each domain event",
    instructions=[
        "Name commands in the imperative (PlaceOrder, ApprovePayment)",
        "Link every command to the events it produces",
        "Note preconditions and business rules guarding each command",
    ],
    output_format="JSON with commands (array of name, triggersEvents, preconditions)",
    output_schema=schema(
        ["commands"],
        commands=array_of(
            name=STRING,
            description=STRING,
            triggersEvents=STRINGS,
            preconditions=STRINGS,
        ),
    ),
    label="commands",
)

identify_actors_task = _storming_task(
    "identify-actors",
    title="Identify Actors - Users and Systems",
    agent_name="actor-identifier",
    role="User experience and domain analyst",
    task=(
        "Identify all actors (users, roles, external systems) that interact with the "
        "domain"
    ),
    instructions=[
        "Identify human roles and automated actors",
        "Map which commands each actor issues",
        "Capture the information each actor needs to decide",
    ],
    output_format="JSON with actors (array of name, type, commands)",
    output_schema=schema(
        ["actors"], actors=array_of(name=STRING, type=STRING, commands=STRINGS)
    ),
    label="actors",
)

identify_aggregates_task = _storming_task(
    "identify-aggregates",
    title="Identify Aggregates - Consistency Boundaries",
    agent_name="aggregate-identifier",
    role="Domain-Driven Design expert identifying aggregates and boundaries",
    task=(
        "Identify aggregates as consistency boundaries around related events and "
        "commands"
    ),
    instructions=[
        "Group commands and events that must stay transactionally consistent",
        "Name each aggregate after the domain concept it protects",
        "List the invariants each aggregate enforces",
        "Keep aggregates small; prefer eventual consistency between them",
    ],
    output_format="JSON with aggregates (array of name, commands, events, invariants)",
    output_schema=schema(
        ["aggregates"],
        aggregates=array_of(
            name=STRING, commands=STRINGS, events=STRINGS, invariants=STRINGS
        ),
    ),
    label="aggregates",
)

identify_external_systems_task = _storming_task(
    "identify-external-systems",
    title="Identify External Systems - Integrations",
    agent_name="integration-analyzer",
    role="Integration architect mapping external system dependencies",
    task=(
        "Identify external systems, APIs, and third-party services that integrate "
        "with the domain"
    ),
    instructions=[
        "Identify systems that issue commands or consume events",
        "Record the integration style for each (API, messaging, batch)",
        "Flag integrations that are hotspots or single points of failure",
    ],
    output_format="JSON with systems (array of name, integrationType, events)",
    output_schema=schema(
        ["systems"],
        systems=array_of(name=STRING, integrationType=STRING, events=STRINGS),
    ),
    label="integrations",
)

identify_policies_task = _storming_task(
    "identify-policies",
    title="Identify Policies - Business Rules and Automation",
    agent_name="policy-identifier",
    role="Business analyst identifying policies and automation rules",
    task=(
        "Identify business policies, rules, and automation that react to domain events"
    ),
    instructions=[
        "Express each policy as 'whenever <event> then <command>'",
        "Distinguish automated policies from manual procedures",
        "Link policies to the aggregates they affect",
    ],
    output_format="JSON with policies (array of name, trigger, action, automated)",
    output_schema=schema(
        ["policies"],
        policies=array_of(
            name=STRING, trigger=STRING, action=STRING, automated={"type": "boolean"}
        ),
    ),
    label="policies",
)

identify_bounded_contexts_task = _storming_task(
    "identify-bounded-contexts",
    title="Identify Bounded Contexts - Domain Boundaries",
    agent_name="context-mapper",
    role="Strategic DDD expert identifying bounded contexts",
    task=(
        "Identify bounded contexts as cohesive domain boundaries with consistent "
        "language"
    ),
    instructions=[
        "Cluster aggregates that share a ubiquitous language",
        "Name each context and state its responsibility",
        "Note terms that change meaning across contexts",
        "Classify contexts as core, supporting or generic subdomains",
    ],
    output_format=(
        "JSON with contexts (array of name, responsibility, aggregates, type)"
    ),
    output_schema=schema(
        ["contexts"],
        contexts=array_of(
            name=STRING,
            responsibility=STRING,
            aggregates=STRINGS,
            type=STRING,
            ubiquitousLanguage=OBJECT,
        ),
    ),
    label="bounded-contexts",
)

create_domain_model_task = _storming_task(
    "create-domain-model",
    title="Create Domain Model - Comprehensive Documentation",
    agent_name="domain-modeler",
    role="Domain architect synthesizing complete domain model",
    task="Create comprehensive domain model integrating all event storming artifacts",
    instructions=[
        "Combine events, commands, actors, aggregates, policies and external systems",
        "Describe entities, value objects and their relationships",
        "Describe the main process flows end to end",
    ],
    output_format="JSON with model (entities, valueObjects, relationships, flows)",
    output_schema=schema(["model"], model=OBJECT),
    label="domain-model",
)

create_context_map_task = _storming_task(
    "create-context-map",
    title="Create Context Map - Strategic Design",
    agent_name="strategic-designer",
    role="Strategic DDD expert creating context maps",
    task=(
        "Create context map showing bounded context relationships and integration "
        "patterns"
    ),
    instructions=[
        "Identify upstream/downstream relationships between contexts",
        "Choose an integration pattern per relationship (ACL, OHS, conformist, "
        "shared kernel, partnership)",
        "Note team and ownership implications",
    ],
    output_format="JSON with map (relationships array and diagram source)",
    output_schema=schema(["map"], map=OBJECT),
    label="context-map",
)

create_documentation_task = _storming_task(
    "create-documentation",
    title="Create Documentation - Artifacts and Reports",
    agent_name="documentation-specialist",
    role="Technical writer creating comprehensive event storming documentation",
    task="Create complete documentation suite from event storming session",
    instructions=[
        "Write an executive summary of the session",
        "Produce an event catalog, command guide and aggregate handbook",
        "Document integration points and external systems",
        "Generate an implementation roadmap with next steps",
    ],
    output_format="JSON with documentation artifacts (markdown, diagrams, guides)",
    output_schema=schema(
        ["artifacts"],
        artifacts={
            "type": "object",
            "properties": {
                "executiveSummary": STRING,
                "eventCatalog": STRING,
                "commandGuide": STRING,
                "aggregateHandbook": STRING,
                "contextHandbook": STRING,
                "integrationGuide": STRING,
                "implementationRoadmap": STRING,
            },
        },
    ),
    label="documentation",
)

validate_domain_model_task = _storming_task(
    "validate-domain-model",
    title="Validate Domain Model - Quality Assessment",
    agent_name="quality-validator",
    role="Domain modeling expert performing quality assessment",
    task="Validate domain model completeness, consistency, and quality",
    instructions=[
        "Assess completeness: are all key domain concepts captured?",
        "Check consistency of relationships and flows",
        "Validate that bounded context boundaries are clear",
        "Review aggregate boundaries as transaction boundaries",
        "Score overall quality 0-100 against the target quality",
        "Provide actionable recommendations for improvement",
    ],
    output_format=(
        "JSON with score, feedback, validationResults, issues, recommendations"
    ),
    output_schema=schema(
        ["score", "feedback"],
        score=SCORE,
        feedback=STRING,
        validationResults=OBJECT,
        issues=OBJECTS,
        recommendations=STRINGS,
    ),
    label="validation",
)


class EventStormingInputs(ProcessInputs):
    domain: str
    scope: str = ""
    participant_count: int = 8
    workshop_duration: int = 240  # minutes


@process(
    PROCESS_ID,
    description=(
        "Collaborative workshop technique for discovering domain events, commands, "
        "aggregates, and bounded contexts"
    ),
    inputs_model=EventStormingInputs,
    outputs=("success", "domainModel", "boundedContexts", "artifacts", "validation"),
    tasks=(
        prepare_workshop_task,
        chaotic_exploration_task,
        enforce_timeline_task,
        identify_commands_task,
        identify_actors_task,
        identify_aggregates_task,
        identify_external_systems_task,
        identify_policies_task,
        identify_bounded_contexts_task,
        create_domain_model_task,
        create_context_map_task,
        create_documentation_task,
        validate_domain_model_task,
    ),
)
def event_storming(inputs: EventStormingInputs, ctx: ProcessContext) -> dict[str, Any]:
    start_time = ctx.now()
    domain = inputs.domain

    ctx.log("info", f"Starting Event Storming for {domain}")
    preparation = ctx.task(
        prepare_workshop_task,
        {
            "domain": domain,
            "scope": inputs.scope,
            "participantCount": inputs.participant_count,
            "workshopDuration": inputs.workshop_duration,
        },
    )
    ctx.breakpoint(
        question=(
            "Workshop preparation complete. Ready to begin Event Storming session?"
        ),
        title="Workshop Preparation Review",
        files=[
            {"path": "artifacts/workshop-agenda.md", "format": "markdown"},
            {"path": "artifacts/participant-guide.md", "format": "markdown"},
        ],
    )

    discovery = ctx.task(
        chaotic_exploration_task,
        {"domain": domain, "scope": inputs.scope, "preparation": preparation},
    )
    timeline = ctx.task(
        enforce_timeline_task, {"domain": domain, "events": discovery["events"]}
    )
    events = timeline["events"]
    ctx.breakpoint(
        question=(
            "Event timeline established. Validate chronological flow and completeness?"
        ),
        title="Timeline Validation",
        files=[
            {"path": "artifacts/event-timeline.md", "format": "markdown"},
            {"path": "artifacts/event-timeline.json", "format": "json"},
        ],
    )

    commands_result, actors_result = ctx.parallel.all(
        [
            lambda: ctx.task(
                identify_commands_task, {"domain": domain, "events": events}
            ),
            lambda: ctx.task(
                identify_actors_task, {"domain": domain, "events": events}
            ),
        ]
    )
    commands = commands_result["commands"]
    actors = actors_result["actors"]

    aggregates = ctx.task(
        identify_aggregates_task,
        {"domain": domain, "events": events, "commands": commands, "actors": actors},
    )["aggregates"]

    external_result, policies_result = ctx.parallel.all(
        [
            lambda: ctx.task(
                identify_external_systems_task,
                {"domain": domain, "events": events, "commands": commands},
            ),
            lambda: ctx.task(
                identify_policies_task,
                {"domain": domain, "events": events, "aggregates": aggregates},
            ),
        ]
    )
    external_systems = external_result["systems"]
    policies = policies_result["policies"]

    contexts = ctx.task(
        identify_bounded_contexts_task,
        {
            "domain": domain,
            "events": events,
            "aggregates": aggregates,
            "commands": commands,
            "actors": actors,
        },
    )["contexts"]
    ctx.breakpoint(
        question="Bounded contexts identified. Review context boundaries and naming?",
        title="Bounded Context Review",
        files=[
            {"path": "artifacts/bounded-contexts.md", "format": "markdown"},
            {"path": "artifacts/context-map.json", "format": "json"},
        ],
    )

    domain_model, context_map, documentation = ctx.parallel.all(
        [
            lambda: ctx.task(
                create_domain_model_task,
                {
                    "domain": domain,
                    "events": events,
                    "commands": commands,
                    "actors": actors,
                    "aggregates": aggregates,
                    "externalSystems": external_systems,
                    "policies": policies,
                },
            ),
            lambda: ctx.task(
                create_context_map_task, {"domain": domain, "boundedContexts": contexts}
            ),
            lambda: ctx.task(
                create_documentation_task,
                {
                    "domain": domain,
                    "scope": inputs.scope,
                    "events": events,
                    "commands": commands,
                    "actors": actors,
                    "aggregates": aggregates,
                    "boundedContexts": contexts,
                    "externalSystems": external_systems,
                    "policies": policies,
                },
            ),
        ]
    )

    validation = ctx.task(
        validate_domain_model_task,
        {
            "domain": domain,
            "domainModel": domain_model["model"],
            "boundedContexts": contexts,
            "targetQuality": TARGET_QUALITY,
        },
    )
    if validation["score"] < TARGET_QUALITY:
        ctx.breakpoint(
            question=(
                f"Domain model quality score: {validation['score']}/100. Review and "
                "refine?"
            ),
            title="Quality Gate - Model Validation",
            files=[
                {"path": "artifacts/validation-report.md", "format": "markdown"},
                {"path": "artifacts/quality-issues.json", "format": "json"},
            ],
        )

    return {
        "success": True,
        "domain": domain,
        "scope": inputs.scope,
        "domainModel": domain_model["model"],
        "boundedContexts": contexts,
        "artifacts": {
            "eventTimeline": events,
            "commands": commands,
            "actors": actors,
            "aggregates": aggregates,
            "externalSystems": external_systems,
            "policies": policies,
            "contextMap": context_map["map"],
            "documentation": documentation["artifacts"],
        },
        "validation": {
            "score": validation["score"],
            "feedback": validation["feedback"],
        },
        "duration": ctx.now() - start_time,
        "metadata": run_metadata(
            PROCESS_ID,
            start_time,
            participantCount=inputs.participant_count,
            workshopDuration=inputs.workshop_duration,
        ),
    }
