"""
C4 model documentation.

Hierarchical diagram generation (Context, Container, Component and
optional Code levels) with supplementary deployment, dynamic and landscape
diagrams, a narrative document and a weighted quality review.
"""

from typing import Any

from pydantic import Field

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessInputs, process
from archflow.domain.artifacts import file_refs
from archflow.domain.models import TaskContext, TaskDefinition
from archflow.domain.scoring import weighted_score
from archflow.domain.tasks import agent_task, define_task
from archflow.processes.common import (
    ARTIFACTS,
    BOOLEAN,
    INTEGER,
    OBJECT,
    OBJECTS,
    SCORE,
    STRING,
    STRINGS,
    array_of,
    run_metadata,
    schema,
)

PROCESS_ID = "software-architecture/c4-model-documentation"
QUALITY_TARGET = 85

QUALITY_WEIGHTS = {
    "contextDiagram": 15,
    "containerDiagram": 25,
    "componentDiagrams": 25,
    "diagramNotation": 10,
    "narrativeDocumentation": 15,
    "supplementaryDiagrams": 10,
}

DIAGRAM_RESULT = schema(
    ["type", "diagramPath", "description", "artifacts"],
    type=STRING,
    diagramPath=STRING,
    description=STRING,
    artifacts=ARTIFACTS,
)


# =============================================================================
# TASKS
# =============================================================================


@define_task("system-context-analysis")
def system_context_analysis_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Analyze system context and boundaries",
        agent_name="system-context-analyst",
        role="software architect specializing in C4 modeling",
        task=(
            "Analyze system boundaries, identify users, external systems, and "
            "define high-level system purpose and scope"
        ),
        context=args,
        instructions=[
            "Review requirements to understand system scope and purpose",
            "Identify all user types and personas who interact with the system",
            "Identify all external systems the system integrates with",
            "Define a clear system boundary (inside vs outside the system)",
            "Identify key interactions between users, system and external systems",
            "Create a system context summary document",
        ],
        output_format=(
            "JSON with systemPurpose, systemBoundary, users (array), "
            "externalSystems (array), keyInteractions (array), artifacts"
        ),
        output_schema=schema(
            ["systemPurpose", "users", "externalSystems", "artifacts"],
            systemPurpose=STRING,
            systemBoundary=STRING,
            users=array_of(name=STRING, description=STRING, type=STRING),
            externalSystems=array_of(name=STRING, description=STRING, type=STRING),
            keyInteractions=OBJECTS,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "c4-model", "system-context"],
    )


@define_task("context-diagram-generation")
def context_diagram_task(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Generate C4 Context Diagram (Level 1)",
        agent_name="context-diagram-generator",
        role="software architect and diagram specialist",
        task=(
            "Generate a C4 Context Diagram showing system boundaries, users, and "
            "external systems using the requested diagram format"
        ),
        context=args,
        instructions=[
            "Place the system in scope at the center of the diagram",
            "Show every user type as a person element",
            "Show every external system with a short description",
            "Label each relationship with its intent and protocol",
            f"Write the diagram in {args.get('diagramFormat', 'plantuml')} notation",
            "Include a legend and a title",
        ],
        output_format=(
            "JSON with diagramPath, userCount, externalSystemCount, "
            "systemPurpose, artifacts"
        ),
        output_schema=schema(
            [
                "diagramPath",
                "userCount",
                "externalSystemCount",
                "systemPurpose",
                "artifacts",
            ],
            diagramPath=STRING,
            userCount=INTEGER,
            externalSystemCount=INTEGER,
            systemPurpose=STRING,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "c4-model", "context-diagram", "level-1"],
    )


@define_task("container-identification")
def container_identification_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Identify containers and technology choices",
        agent_name="container-identifier",
        role="software architect specializing in application architecture",
        task=(
            "Identify all deployable units (containers) within the system including "
            "applications, databases, and data stores with their technology choices"
        ),
        context=args,
        instructions=[
            "A container is a separately deployable unit: web app, mobile app, "
            "API, database, message queue, file store",
            "For each container identify name, type, technology, responsibilities "
            "and dependencies",
            "Document inter-container communication protocols (REST, gRPC, messaging)",
            "Map containers to the deployment architecture",
            "Create a container inventory document",
        ],
        output_format=(
            "JSON with containers (array), technologies (array), databases (array), "
            "communicationProtocols (array), artifacts"
        ),
        output_schema=schema(
            ["containers", "technologies", "artifacts"],
            containers=array_of(
                name=STRING,
                type=STRING,
                technology=STRING,
                description=STRING,
                responsibilities=STRINGS,
                dependencies=STRINGS,
            ),
            technologies=STRINGS,
            databases=STRINGS,
            communicationProtocols=STRINGS,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "c4-model", "container-identification"],
    )


@define_task("container-diagram-generation")
def container_diagram_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Generate C4 Container Diagram (Level 2)",
        agent_name="container-diagram-generator",
        role="software architect and diagram specialist",
        task=(
            "Generate a C4 Container Diagram showing all deployable units, technology "
            "choices, and inter-container communication"
        ),
        context=args,
        instructions=[
            "Draw the system boundary containing every identified container",
            "Annotate each container with its technology",
            "Show databases and message brokers distinctly",
            "Label inter-container relationships with protocol and purpose",
            "Keep users and external systems from the context diagram",
        ],
        output_format=(
            "JSON with diagramPath, containerCount, technologies, databases, artifacts"
        ),
        output_schema=schema(
            ["diagramPath", "containerCount", "technologies", "artifacts"],
            diagramPath=STRING,
            containerCount=INTEGER,
            technologies=STRINGS,
            databases=STRINGS,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "c4-model", "container-diagram", "level-2"],
    )


@define_task("component-breakdown")
def component_breakdown_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=(
            f"Break down container {args['container'].get('name', '')} into components"
        ),
        agent_name="component-breakdown-analyst",
        role="software architect specializing in component design",
        task=(
            "Decompose a container into its constituent components, define "
            "responsibilities, interfaces, and dependencies"
        ),
        context=args,
        instructions=[
            "Identify the major structural building blocks of the container",
            "Give each component a single clear responsibility",
            "Define the interfaces each component exposes",
            "Map dependencies between components and to other containers",
            "Rate each component's complexity as low, medium or high",
            "Flag components that warrant a code-level diagram",
        ],
        output_format=(
            "JSON with containerName, components (array with name, responsibility, "
            "interfaces, dependencies, complexity, requiresCodeDiagram), artifacts"
        ),
        output_schema=schema(
            ["containerName", "components", "artifacts"],
            containerName=STRING,
            components=array_of(
                name=STRING,
                responsibility=STRING,
                interfaces=STRINGS,
                dependencies=STRINGS,
                complexity={"type": "string", "enum": ["low", "medium", "high"]},
                requiresCodeDiagram=BOOLEAN,
            ),
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "c4-model", "component-breakdown"],
    )


@define_task("component-diagram-generation")
def component_diagram_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Generate C4 Component Diagram (Level 3) for {args['containerName']}",
        agent_name="component-diagram-generator",
        role="software architect and diagram specialist",
        task=(
            "Generate a C4 Component Diagram for a specific container showing "
            "internal components and their relationships"
        ),
        context=args,
        instructions=[
            "Draw the container boundary with its components inside",
            "Show component interfaces and their consumers",
            "Include neighbouring containers the components depend on",
            "Label relationships with technology and purpose",
        ],
        output_format=(
            "JSON with containerName, diagramPath, componentCount, interfaceCount, "
            "artifacts"
        ),
        output_schema=schema(
            ["containerName", "diagramPath", "componentCount", "artifacts"],
            containerName=STRING,
            diagramPath=STRING,
            componentCount=INTEGER,
            interfaceCount=INTEGER,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "c4-model", "component-diagram", "level-3"],
    )


@define_task("code-diagram-generation")
def code_diagram_task(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=(
            "Generate C4 Code Diagram (Level 4) for "
            f"{args['component'].get('name', '')}"
        ),
        agent_name="code-diagram-generator",
        role="software architect and UML specialist",
        task=(
            "Generate a code-level UML class diagram for a complex component showing "
            "classes, interfaces, and design patterns"
        ),
        context=args,
        instructions=[
            "Identify the key classes and interfaces of the component",
            "Show inheritance, composition and dependency relationships",
            "Highlight the design patterns in use",
            "Keep the diagram focused on the component's public surface",
        ],
        output_format=(
            "JSON with componentName, diagramPath, classCount, designPatterns, "
            "artifacts"
        ),
        output_schema=schema(
            ["componentName", "diagramPath", "artifacts"],
            componentName=STRING,
            diagramPath=STRING,
            classCount=INTEGER,
            designPatterns=STRINGS,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "c4-model", "code-diagram", "level-4"],
    )


@define_task("deployment-diagram-generation")
def deployment_diagram_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Generate C4 Deployment Diagram",
        agent_name="deployment-diagram-generator",
        role="DevOps architect and infrastructure specialist",
        task=(
            "Generate a C4 Deployment Diagram showing how containers are deployed to "
            "infrastructure"
        ),
        context=args,
        instructions=[
            "Show deployment nodes (regions, clusters, hosts, managed services)",
            "Place each container instance on its node",
            "Show replication, load balancing and failover",
            "Return type 'deployment'",
        ],
        output_format="JSON with type, diagramPath, description, artifacts",
        output_schema=DIAGRAM_RESULT,
        labels=["agent", "c4-model", "deployment-diagram", "supplementary"],
    )


@define_task("dynamic-diagram-generation")
def dynamic_diagram_task(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Generate C4 Dynamic Diagram",
        agent_name="dynamic-diagram-generator",
        role="software architect and sequence diagram specialist",
        task=(
            "Generate a C4 Dynamic Diagram showing runtime behavior for key user "
            "journeys or scenarios"
        ),
        context=args,
        instructions=[
            "Pick the user journeys and scenarios given in the requirements",
            "Number each interaction step in order",
            "Show which container handles each step",
            "Return type 'dynamic'",
        ],
        output_format="JSON with type, diagramPath, description, artifacts",
        output_schema=DIAGRAM_RESULT,
        labels=["agent", "c4-model", "dynamic-diagram", "supplementary"],
    )


@define_task("system-landscape-diagram")
def system_landscape_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Generate C4 System Landscape Diagram",
        agent_name="landscape-diagram-generator",
        role="enterprise architect",
        task=(
            "Generate a C4 System Landscape Diagram showing multiple systems and "
            "their relationships in the enterprise"
        ),
        context=args,
        instructions=[
            "Show the system alongside every external system it touches",
            "Group systems by owning organization or domain",
            "Return type 'landscape'",
        ],
        output_format="JSON with type, diagramPath, description, artifacts",
        output_schema=DIAGRAM_RESULT,
        labels=["agent", "c4-model", "landscape-diagram", "supplementary"],
    )


@define_task("architecture-narrative-generation")
def architecture_narrative_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Generate comprehensive architecture narrative document",
        agent_name="architecture-writer",
        role="technical writer and software architect",
        task=(
            "Create an architecture documentation narrative explaining all C4 "
            "diagrams with context, rationale, and technical details"
        ),
        context=args,
        instructions=[
            "Open with an executive summary for non-technical readers",
            "Walk through each C4 level, referencing the generated diagrams",
            "Explain key technology choices and their rationale",
            "Describe cross-cutting concerns (security, scalability, observability)",
            "List open questions and known risks",
        ],
        output_format=(
            "JSON with documentPath, executiveSummary, sections (array), artifacts"
        ),
        output_schema=schema(
            ["documentPath", "executiveSummary", "artifacts"],
            documentPath=STRING,
            executiveSummary=STRING,
            sections=STRINGS,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "c4-model", "documentation", "narrative"],
    )


@define_task("c4-quality-validation")
def c4_quality_validation_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Validate C4 documentation quality and completeness",
        agent_name="c4-quality-validator",
        role="principal software architect and C4 modeling expert",
        task=(
            "Assess C4 documentation quality, completeness, and adherence to C4 "
            "modeling best practices"
        ),
        context=args,
        instructions=[
            "Evaluate Context diagram completeness (weight: 15%)",
            "Evaluate Container diagram quality (weight: 25%)",
            "Evaluate Component diagrams thoroughness (weight: 25%)",
            "Assess diagram notation consistency (weight: 10%)",
            "Evaluate narrative documentation quality (weight: 15%)",
            "Check supplementary diagrams relevance (weight: 10%)",
            "Calculate the weighted overall score (0-100)",
            "Identify gaps and give specific recommendations",
        ],
        output_format=(
            "JSON with overallScore (number 0-100), componentScores (object), "
            "gaps (array), recommendations (array), artifacts"
        ),
        output_schema=schema(
            ["overallScore", "componentScores", "recommendations", "artifacts"],
            overallScore=SCORE,
            componentScores={
                "type": "object",
                "properties": {key: {"type": "number"} for key in QUALITY_WEIGHTS},
            },
            gaps=STRINGS,
            recommendations=STRINGS,
            strengths=STRINGS,
            c4BestPractices=OBJECT,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "c4-model", "validation", "quality-scoring"],
    )


# =============================================================================
# PROCESS
# =============================================================================


class C4Inputs(ProcessInputs):
    system_name: str = "System"
    requirements: list[dict[str, Any]] = Field(default_factory=list)
    technologies: list[Any] = Field(default_factory=list)
    users: list[Any] = Field(default_factory=list)
    external_systems: list[Any] = Field(default_factory=list)
    deployment_architecture: dict[str, Any] = Field(default_factory=dict)
    output_dir: str = "c4-architecture-output"
    include_code_diagrams: bool = False
    diagram_format: str = "plantuml"  # plantuml, mermaid or structurizr
    generate_deployment_diagram: bool = True


TASKS = (
    system_context_analysis_task,
    context_diagram_task,
    container_identification_task,
    container_diagram_task,
    component_breakdown_task,
    component_diagram_task,
    code_diagram_task,
    deployment_diagram_task,
    dynamic_diagram_task,
    system_landscape_task,
    architecture_narrative_task,
    c4_quality_validation_task,
)


@process(
    PROCESS_ID,
    description=(
        "C4 Model architecture documentation with hierarchical diagram generation "
        "(Context, Container, Component, Code levels) and supplementary diagrams"
    ),
    inputs_model=C4Inputs,
    outputs=(
        "success",
        "contextDiagram",
        "containerDiagram",
        "componentDiagrams",
        "codeDiagrams",
        "supplementaryDiagrams",
        "narrativeDocument",
        "qualityScore",
        "artifacts",
    ),
    tasks=TASKS,
)
def c4_model_documentation(inputs: C4Inputs, ctx: ProcessContext) -> dict[str, Any]:
    start_time = ctx.now()
    artifacts: list[dict[str, Any]] = []
    system_name = inputs.system_name
    fmt = inputs.diagram_format
    out = inputs.output_dir

    ctx.log("info", f"Starting C4 Model Architecture Documentation for {system_name}")

    # Phase 1-2: context
    ctx.log("info", "Phase 1: Analyzing system context and boundaries")
    system_context = ctx.task(
        system_context_analysis_task,
        {
            "systemName": system_name,
            "requirements": inputs.requirements,
            "users": inputs.users,
            "externalSystems": inputs.external_systems,
            "outputDir": out,
        },
    )
    artifacts.extend(system_context["artifacts"])

    ctx.log("info", "Phase 2: Creating C4 Context Diagram (Level 1)")
    context_diagram = ctx.task(
        context_diagram_task,
        {
            "systemName": system_name,
            "systemContext": system_context,
            "diagramFormat": fmt,
            "outputDir": out,
        },
    )
    artifacts.extend(context_diagram["artifacts"])

    ctx.breakpoint(
        question=(
            "Context diagram created. Review system boundaries, users "
            f"({context_diagram['userCount']}), and external systems "
            f"({context_diagram['externalSystemCount']}). Approve to proceed to "
            "Container diagram?"
        ),
        title="C4 Context Diagram Review",
        files=file_refs(
            context_diagram["artifacts"], fmt, language=fmt, label="Context Diagram"
        ),
        summary={
            "systemName": system_name,
            "userCount": context_diagram["userCount"],
            "externalSystemCount": context_diagram["externalSystemCount"],
            "systemPurpose": context_diagram["systemPurpose"],
        },
    )

    # Phase 3-4: containers
    ctx.log("info", "Phase 3: Identifying containers and technology choices")
    containers = ctx.task(
        container_identification_task,
        {
            "systemName": system_name,
            "requirements": inputs.requirements,
            "technologies": inputs.technologies,
            "systemContext": system_context,
            "deploymentArchitecture": inputs.deployment_architecture,
            "outputDir": out,
        },
    )
    artifacts.extend(containers["artifacts"])

    ctx.log("info", "Phase 4: Creating C4 Container Diagram (Level 2)")
    container_diagram = ctx.task(
        container_diagram_task,
        {
            "systemName": system_name,
            "systemContext": system_context,
            "containerIdentification": containers,
            "diagramFormat": fmt,
            "outputDir": out,
        },
    )
    artifacts.extend(container_diagram["artifacts"])

    ctx.breakpoint(
        question=(
            f"Container diagram created with {container_diagram['containerCount']} "
            "containers. Review technology choices and inter-container "
            "communication. Approve to proceed to Component diagrams?"
        ),
        title="C4 Container Diagram Technology Review",
        files=file_refs(
            container_diagram["artifacts"], fmt, language=fmt, label="Container Diagram"
        ),
        summary={
            "systemName": system_name,
            "containerCount": container_diagram["containerCount"],
            "technologies": container_diagram["technologies"],
            "databases": container_diagram.get("databases", []),
        },
    )

    # Phase 5-6: components, one breakdown and one diagram per container
    ctx.log("info", "Phase 5: Breaking down containers into components")
    breakdowns = ctx.parallel.map(
        component_breakdown_task,
        [
            {
                "systemName": system_name,
                "container": container,
                "requirements": inputs.requirements,
                "outputDir": out,
            }
            for container in containers["containers"]
        ],
    )
    for breakdown in breakdowns:
        artifacts.extend(breakdown["artifacts"])

    ctx.log("info", "Phase 6: Creating C4 Component Diagrams (Level 3)")
    component_diagrams = ctx.parallel.map(
        component_diagram_task,
        [
            {
                "systemName": system_name,
                "containerName": breakdown["containerName"],
                "componentBreakdown": breakdown,
                "diagramFormat": fmt,
                "outputDir": out,
            }
            for breakdown in breakdowns
        ],
    )
    for diagram in component_diagrams:
        artifacts.extend(diagram["artifacts"])

    total_components = sum(d["componentCount"] for d in component_diagrams)

    ctx.breakpoint(
        question=(
            f"Component diagrams created for {len(component_diagrams)} containers "
            f"with {total_components} total components. Review component "
            "responsibilities and dependencies. Approve?"
        ),
        title="C4 Component Diagrams Development Review",
        files=[
            ref
            for d in component_diagrams
            for ref in file_refs(
                d["artifacts"],
                fmt,
                language=fmt,
                label=f"Component Diagram: {d['containerName']}",
            )
        ],
        summary={
            "systemName": system_name,
            "containerCount": len(component_diagrams),
            "totalComponents": total_components,
            "containersDetailed": [
                {
                    "container": d["containerName"],
                    "components": d["componentCount"],
                    "interfaces": d.get("interfaceCount"),
                }
                for d in component_diagrams
            ],
        },
    )

    # Phase 7: code diagrams for complex components
    code_diagrams: list[dict[str, Any]] = []
    if inputs.include_code_diagrams:
        ctx.log(
            "info",
            "Phase 7: Creating C4 Code Diagrams (Level 4) for complex components",
        )
        complex_components = [
            {"containerName": breakdown["containerName"], "component": component}
            for breakdown in breakdowns
            for component in breakdown["components"]
            if component.get("complexity") == "high"
            or component.get("requiresCodeDiagram")
        ]
        if complex_components:
            code_diagrams = ctx.parallel.map(
                code_diagram_task,
                [
                    {
                        "systemName": system_name,
                        **entry,
                        "diagramFormat": fmt,
                        "outputDir": out,
                    }
                    for entry in complex_components
                ],
            )
            for diagram in code_diagrams:
                artifacts.extend(diagram["artifacts"])
            ctx.log("info", f"Generated {len(code_diagrams)} code-level diagrams")
        else:
            ctx.log(
                "info",
                "No complex components identified requiring code-level diagrams",
            )

    # Phase 8: supplementary diagrams
    ctx.log("info", "Phase 8: Creating supplementary diagrams")
    supplementary: list[tuple[Any, dict[str, Any]]] = []
    if inputs.generate_deployment_diagram and inputs.deployment_architecture:
        supplementary.append(
            (
                deployment_diagram_task,
                {
                    "systemName": system_name,
                    "deploymentArchitecture": inputs.deployment_architecture,
                    "containers": containers["containers"],
                    "diagramFormat": fmt,
                    "outputDir": out,
                },
            )
        )
    journeys = [
        r for r in inputs.requirements if r.get("userJourney") or r.get("scenario")
    ]
    if journeys:
        supplementary.append(
            (
                dynamic_diagram_task,
                {
                    "systemName": system_name,
                    "requirements": journeys,
                    "containers": containers["containers"],
                    "diagramFormat": fmt,
                    "outputDir": out,
                },
            )
        )
    if inputs.external_systems:
        supplementary.append(
            (
                system_landscape_task,
                {
                    "systemName": system_name,
                    "systemContext": system_context,
                    "externalSystems": inputs.external_systems,
                    "diagramFormat": fmt,
                    "outputDir": out,
                },
            )
        )

    supplementary_diagrams = ctx.parallel.all(
        [lambda t=template, a=args: ctx.task(t, a) for template, args in supplementary]
    )
    for diagram in supplementary_diagrams:
        artifacts.extend(diagram["artifacts"])
    if supplementary_diagrams:
        ctx.log(
            "info",
            f"Generated {len(supplementary_diagrams)} supplementary diagrams",
        )

    # Phase 9: narrative
    ctx.log("info", "Phase 9: Generating architecture narrative document")
    narrative = ctx.task(
        architecture_narrative_task,
        {
            "systemName": system_name,
            "systemContext": system_context,
            "containerIdentification": containers,
            "componentBreakdowns": breakdowns,
            "contextDiagram": context_diagram,
            "containerDiagram": container_diagram,
            "componentDiagrams": component_diagrams,
            "codeDiagrams": code_diagrams,
            "supplementaryDiagrams": supplementary_diagrams,
            "requirements": inputs.requirements,
            "technologies": inputs.technologies,
            "outputDir": out,
        },
    )
    artifacts.extend(narrative["artifacts"])

    # Phase 10: quality validation
    ctx.log("info", "Phase 10: Validating C4 documentation quality and completeness")
    validation = ctx.task(
        c4_quality_validation_task,
        {
            "systemName": system_name,
            "contextDiagram": context_diagram,
            "containerDiagram": container_diagram,
            "componentDiagrams": component_diagrams,
            "codeDiagrams": code_diagrams,
            "supplementaryDiagrams": supplementary_diagrams,
            "narrativeDocument": narrative,
            "outputDir": out,
        },
    )
    artifacts.extend(validation["artifacts"])

    quality_score = validation["overallScore"]
    quality_met = quality_score >= QUALITY_TARGET
    weighted = weighted_score(validation["componentScores"], QUALITY_WEIGHTS)

    ctx.breakpoint(
        question=(
            f"C4 Model documentation complete. Quality score: {quality_score}/100. "
            + (
                "Documentation meets quality standards!"
                if quality_met
                else "Documentation may need refinement."
            )
            + " Review and approve?"
        ),
        title="C4 Architecture Documentation Final Review",
        files=file_refs(artifacts),
        summary={
            "qualityScore": quality_score,
            "weightedScore": weighted,
            "qualityMet": quality_met,
            "systemName": system_name,
            "totalArtifacts": len(artifacts),
            "diagramCounts": {
                "context": 1,
                "container": 1,
                "component": len(component_diagrams),
                "code": len(code_diagrams),
                "supplementary": len(supplementary_diagrams),
            },
            "totalContainers": len(containers["containers"]),
            "totalComponents": total_components,
            "narrativeDocumentPath": narrative["documentPath"],
        },
    )

    return {
        "success": True,
        "systemName": system_name,
        "qualityScore": quality_score,
        "weightedScore": weighted,
        "qualityMet": quality_met,
        "contextDiagram": {
            "path": context_diagram["diagramPath"],
            "userCount": context_diagram["userCount"],
            "externalSystemCount": context_diagram["externalSystemCount"],
        },
        "containerDiagram": {
            "path": container_diagram["diagramPath"],
            "containerCount": container_diagram["containerCount"],
            "technologies": container_diagram["technologies"],
            "databases": container_diagram.get("databases", []),
        },
        "componentDiagrams": [
            {
                "containerName": d["containerName"],
                "path": d["diagramPath"],
                "componentCount": d["componentCount"],
                "interfaceCount": d.get("interfaceCount"),
            }
            for d in component_diagrams
        ],
        "codeDiagrams": [
            {
                "componentName": d["componentName"],
                "path": d["diagramPath"],
                "classCount": d.get("classCount"),
                "designPatterns": d.get("designPatterns", []),
            }
            for d in code_diagrams
        ],
        "supplementaryDiagrams": [
            {
                "type": d["type"],
                "path": d["diagramPath"],
                "description": d["description"],
            }
            for d in supplementary_diagrams
        ],
        "narrativeDocument": narrative["documentPath"],
        "artifacts": artifacts,
        "duration": ctx.now() - start_time,
        "metadata": run_metadata(
            PROCESS_ID,
            start_time,
            systemName=system_name,
            diagramFormat=fmt,
            outputDir=out,
            totalDiagrams=2
            + len(component_diagrams)
            + len(code_diagrams)
            + len(supplementary_diagrams),
        ),
    }
