"""
Microservices decomposition.

Decomposes a monolith along bounded contexts: service boundaries, coupling,
data ownership, API contracts, a Strangler Fig migration, deployment and
observability design, a wave-based roadmap, a risk assessment and a scored
strategy document. Systems with fewer than two bounded contexts are turned
back with a modular-monolith recommendation.
"""

from typing import Any

from pydantic import Field

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessInputs, process
from archflow.domain.artifacts import file_refs
from archflow.domain.tasks import TaskTemplate
from archflow.processes.common import (
    ARTIFACTS,
    BOOLEAN,
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

PROCESS_ID = "software-architecture/microservices-decomposition"
MIN_BOUNDED_CONTEXTS = 2
QUALITY_THRESHOLD = 75

SEVERITY = {"type": "string", "enum": ["critical", "high", "medium", "low"]}
COMPLEXITY = {"type": "string", "enum": ["low", "medium", "high", "very-high"]}


def _task(task_id: str, *, labels: list[str], **kwargs: Any) -> TaskTemplate:
    return phase_task(task_id, labels=["microservices", *labels], **kwargs)


def _result(required: list[str], **properties: Any) -> dict[str, Any]:
    return schema([*required, "artifacts"], artifacts=ARTIFACTS, **properties)


# =============================================================================
# TASKS
# =============================================================================

domain_analysis_task = _task(
    "domain-analysis",
    title="Phase 1: Domain Analysis - {projectName}",
    agent_name="domain-architect",
    role="Domain-Driven Design expert and enterprise architect",
    task=(
        "Analyze business domain and identify bounded contexts for microservices "
        "decomposition"
    ),
    instructions=[
        "Identify core, supporting and generic subdomains",
        "Define bounded contexts with clear boundaries and responsibilities",
        "Map the ubiquitous language of each bounded context",
        "Identify domain events and aggregate roots",
        "Analyze context mapping relationships (shared kernel, customer-supplier, "
        "conformist, anti-corruption layer)",
        "Assess domain and technical complexity for each context",
        "Generate a domain model diagram and context map",
    ],
    output_format=(
        "JSON with boundedContexts (array), domainEvents (array), ubiquitousLanguage "
        "(object), contextMap (object), subdomains (object), artifacts"
    ),
    output_schema=_result(
        ["boundedContexts", "domainEvents", "ubiquitousLanguage"],
        boundedContexts=array_of(
            name=STRING,
            type={"type": "string", "enum": ["core", "supporting", "generic"]},
            description=STRING,
            capabilities=STRINGS,
            aggregates=STRINGS,
            domainEvents=STRINGS,
            complexity=COMPLEXITY,
        ),
        domainEvents=array_of(
            event=STRING, context=STRING, triggers=STRINGS, consumers=STRINGS
        ),
        ubiquitousLanguage={"type": "object", "additionalProperties": STRINGS},
        contextMap=OBJECT,
        subdomains=OBJECT,
    ),
    labels=["domain-analysis", "ddd", "bounded-contexts"],
)

service_boundary_task = _task(
    "service-boundary",
    title="Phase 2: Service Boundary Identification - {projectName}",
    agent_name="service-architect",
    role="Microservices architect specializing in service boundary design",
    task=(
        "Define optimal service boundaries aligned with bounded contexts and "
        "business capabilities"
    ),
    instructions=[
        "Map bounded contexts to candidate microservices",
        "Apply the single responsibility principle to each service",
        "Keep cohesion high within services and coupling low between them",
        "Classify services (business capability, entity, utility, gateway, bff)",
        "Assess granularity (not too fine, not too coarse)",
        "Consider team topology and Conway's Law alignment",
        "Generate a service catalog",
    ],
    output_format=(
        "JSON with services (array), serviceTypes (object), granularityAssessment "
        "(object), teamAlignment (object), artifacts"
    ),
    output_schema=_result(
        ["services", "serviceTypes", "granularityAssessment"],
        services=array_of(
            name=STRING,
            boundedContext=STRING,
            type={
                "type": "string",
                "enum": ["business-capability", "entity", "utility", "gateway", "bff"],
            },
            capabilities=STRINGS,
            responsibilities=STRINGS,
            dependencies=STRINGS,
            dataOwnership=STRINGS,
            estimatedComplexity=COMPLEXITY,
            priority=SEVERITY,
        ),
        serviceTypes=OBJECT,
        granularityAssessment=OBJECT,
        teamAlignment=OBJECT,
    ),
    labels=["service-boundaries", "architecture-design"],
)

dependency_analysis_task = _task(
    "dependency-analysis",
    title="Phase 3: Dependency Analysis - {projectName}",
    agent_name="dependency-analyst",
    role=(
        "Software architect specializing in dependency analysis and decoupling "
        "strategies"
    ),
    task="Analyze inter-service dependencies and design decoupling strategies",
    instructions=[
        "Build the dependency graph between candidate services",
        "Identify synchronous and asynchronous dependencies",
        "Detect circular dependencies",
        "Score coupling and cohesion (0-100)",
        "Design decoupling strategies (events, caching, data replication)",
    ],
    output_format=(
        "JSON with dependencyGraph (object), couplingScore, cohesionScore, "
        "decouplingStrategies (array), circularDependencies (array), artifacts"
    ),
    output_schema=_result(
        ["dependencyGraph", "couplingScore", "cohesionScore", "decouplingStrategies"],
        dependencyGraph=OBJECT,
        couplingScore=SCORE,
        cohesionScore=SCORE,
        decouplingStrategies=OBJECTS,
        circularDependencies=OBJECTS,
    ),
    labels=["dependency-analysis", "decoupling"],
)

data_decomposition_task = _task(
    "data-decomposition",
    title="Phase 4: Data Decomposition - {projectName}",
    agent_name="data-architect",
    role="Data architect specializing in distributed data management for microservices",
    task="Design data decomposition strategy implementing database-per-service pattern",
    instructions=[
        "Assign data ownership to each service",
        "Choose a database technology per service",
        "Design consistency patterns (saga, outbox, event sourcing, CQRS)",
        "Plan reference data sharing",
        "Plan the migration from the shared database",
    ],
    output_format=(
        "JSON with strategy (object), databases (array), consistencyPatterns (array), "
        "referenceDataStrategy (object), migrationPlan (object), artifacts"
    ),
    output_schema=_result(
        ["strategy", "databases", "consistencyPatterns", "migrationPlan"],
        strategy=OBJECT,
        databases=array_of(service=STRING, technology=STRING, rationale=STRING),
        consistencyPatterns=OBJECTS,
        referenceDataStrategy=OBJECT,
        migrationPlan=OBJECT,
    ),
    labels=["data-decomposition", "database-per-service"],
)

api_contract_design_task = _task(
    "api-contract-design",
    title="Phase 5: API Contract Design - {projectName}",
    agent_name="api-architect",
    role="API architect specializing in microservices communication patterns",
    task="Design comprehensive API contracts and inter-service communication patterns",
    instructions=[
        "Define the API contract of each service (REST, gRPC, events)",
        "Choose synchronous versus asynchronous communication per interaction",
        "Design the API gateway and backend-for-frontend strategy",
        "Define the versioning and backward compatibility strategy",
    ],
    output_format=(
        "JSON with contracts (array), communicationPatterns (object), "
        "apiGatewayStrategy (object), versioningStrategy (object), artifacts"
    ),
    output_schema=_result(
        ["contracts", "communicationPatterns", "apiGatewayStrategy"],
        contracts=array_of(
            service=STRING, protocol=STRING, endpoints=OBJECTS, events=STRINGS
        ),
        communicationPatterns=OBJECT,
        apiGatewayStrategy=OBJECT,
        versioningStrategy=OBJECT,
    ),
    labels=["api-design", "communication-patterns"],
)

cross_cutting_concerns_task = _task(
    "cross-cutting-concerns",
    title="Phase 6: Cross-Cutting Concerns - {projectName}",
    agent_name="infrastructure-architect",
    role=(
        "Infrastructure architect specializing in microservices cross-cutting concerns"
    ),
    task="Design infrastructure patterns for cross-cutting concerns",
    instructions=[
        "Design service discovery and configuration management",
        "Design authentication and authorization between services",
        "Apply resilience patterns (circuit breaker, retry, bulkhead, timeout)",
        "Decide on a service mesh",
    ],
    output_format=(
        "JSON with patterns (array), infrastructure (object), tools (object), "
        "artifacts"
    ),
    output_schema=_result(
        ["patterns", "infrastructure", "tools"],
        patterns=array_of(concern=STRING, pattern=STRING, implementation=STRING),
        infrastructure=OBJECT,
        tools=OBJECT,
    ),
    labels=["cross-cutting-concerns", "infrastructure"],
)

migration_strategy_task = _task(
    "migration-strategy",
    title="Phase 7: Migration Strategy - {projectName}",
    agent_name="migration-strategist",
    role="Migration architect specializing in monolith-to-microservices transformation",
    task=(
        "Design incremental migration strategy using Strangler Fig and other proven "
        "patterns"
    ),
    instructions=[
        "Design the Strangler Fig facade and routing strategy",
        "Design an anti-corruption layer between monolith and new services",
        "Plan parallel run and feature toggles",
        "Define a rollback plan for every extraction",
    ],
    output_format=(
        "JSON with approach (string), stranglerFigStrategy (object), "
        "antiCorruptionLayer (object), routingStrategy (object), rollbackPlan "
        "(object), artifacts"
    ),
    output_schema=_result(
        ["approach", "stranglerFigStrategy", "routingStrategy", "rollbackPlan"],
        approach=STRING,
        stranglerFigStrategy=OBJECT,
        antiCorruptionLayer=OBJECT,
        routingStrategy=OBJECT,
        rollbackPlan=OBJECT,
    ),
    labels=["migration-strategy", "strangler-fig"],
)

service_prioritization_task = _task(
    "service-prioritization",
    title="Phase 8: Service Prioritization - {projectName}",
    agent_name="prioritization-analyst",
    role="Technical product manager specializing in migration prioritization",
    task="Prioritize services for extraction and sequence migration waves",
    instructions=[
        "Score services by business value, risk, complexity and dependencies",
        "Pick a low-risk pilot service",
        "Group services into migration waves",
        "Identify quick wins",
    ],
    output_format=(
        "JSON with prioritizedServices (array), migrationWaves (array), quickWins "
        "(array), pilotCandidate (object), artifacts"
    ),
    output_schema=_result(
        ["prioritizedServices", "migrationWaves", "quickWins", "pilotCandidate"],
        prioritizedServices=array_of(
            service=STRING, priorityScore=NUMBER, rationale=STRING
        ),
        migrationWaves=OBJECTS,
        quickWins=STRINGS,
        pilotCandidate=OBJECT,
    ),
    labels=["prioritization", "migration-planning"],
)

deployment_architecture_task = _task(
    "deployment-architecture",
    title="Phase 9: Deployment Architecture - {projectName}",
    agent_name="devops-architect",
    role="DevOps architect specializing in microservices deployment",
    task="Design deployment architecture and infrastructure for microservices",
    instructions=[
        "Choose the container orchestration platform",
        "Design one CI/CD pipeline per service",
        "Choose deployment strategies (blue-green, canary, rolling)",
        "Estimate infrastructure cost",
    ],
    output_format=(
        "JSON with architecture (object), orchestration (object), cicdPipeline "
        "(object), infrastructure (object), estimatedCost (object), artifacts"
    ),
    output_schema=_result(
        ["architecture", "orchestration", "cicdPipeline", "infrastructure"],
        architecture=OBJECT,
        orchestration=OBJECT,
        cicdPipeline=OBJECT,
        infrastructure=OBJECT,
        estimatedCost=OBJECT,
    ),
    labels=["deployment", "infrastructure", "devops"],
)

observability_strategy_task = _task(
    "observability-strategy",
    title="Phase 10: Observability Strategy - {projectName}",
    agent_name="sre-architect",
    role="SRE architect specializing in microservices observability",
    task="Design comprehensive observability, monitoring, and operational strategy",
    instructions=[
        "Design metrics collection per service (RED and USE)",
        "Design centralized logging with correlation ids",
        "Design distributed tracing across service calls",
        "Define SLOs and alerting per service",
    ],
    output_format=(
        "JSON with monitoring (object), logging (object), tracing (object), "
        "alerting (object), slos (array), artifacts"
    ),
    output_schema=_result(
        ["monitoring", "logging", "tracing", "alerting", "slos"],
        monitoring=OBJECT,
        logging=OBJECT,
        tracing=OBJECT,
        alerting=OBJECT,
        slos=array_of(service=STRING, sli=STRING, target=STRING),
    ),
    labels=["observability", "monitoring", "sre"],
)

migration_roadmap_task = _task(
    "migration-roadmap",
    title="Phase 11: Migration Roadmap - {projectName}",
    agent_name="program-manager",
    role="Technical program manager specializing in large-scale migrations",
    task=(
        "Create detailed migration roadmap with phases, milestones, and resource "
        "allocation"
    ),
    instructions=[
        "Break the migration into phases aligned with service waves",
        "Define milestones and success criteria",
        "Identify the critical path and dependencies",
        "Allocate team resources across waves",
        "Estimate total cost (development, infrastructure, training)",
    ],
    output_format=(
        "JSON with waves (array), phases (array), milestones (array), timeline "
        "(object), cost (object), resourceAllocation (object), artifacts"
    ),
    output_schema=_result(
        ["waves", "phases", "milestones", "timeline", "cost"],
        waves=array_of(wave=NUMBER, name=STRING, services=STRINGS, duration=STRING),
        phases=array_of(phase=STRING, description=STRING, duration=STRING),
        milestones=array_of(
            milestone=STRING, phase=STRING, targetDate=STRING, criticalPath=BOOLEAN
        ),
        timeline=schema(
            [], totalDuration=STRING, startDate=STRING, endDate=STRING, buffer=STRING
        ),
        cost=schema(
            [],
            development=STRING,
            infrastructure=STRING,
            training=STRING,
            contingency=STRING,
            total=STRING,
        ),
        resourceAllocation=OBJECT,
    ),
    labels=["roadmap", "program-management", "planning"],
)

risk_assessment_task = _task(
    "risk-assessment",
    title="Phase 12: Risk Assessment - {projectName}",
    agent_name="risk-analyst",
    role="Enterprise architect specializing in migration risk analysis",
    task="Conduct comprehensive risk assessment for microservices migration",
    instructions=[
        "Identify technical, organizational, operational and business risks",
        "Rate each risk's severity (critical/high/medium/low) and probability",
        "Write a mitigation plan for every significant risk",
        "Plan contingency actions for critical risks",
        "Assign risk owners",
    ],
    output_format=(
        "JSON with risks (array), criticalRisks (array), overallRiskLevel (string), "
        "mitigationPlan (object), artifacts"
    ),
    output_schema=_result(
        ["risks", "criticalRisks", "overallRiskLevel", "mitigationPlan"],
        risks=array_of(
            riskId=STRING,
            category={
                "type": "string",
                "enum": ["technical", "organizational", "operational", "business"],
            },
            description=STRING,
            severity=SEVERITY,
            probability={"type": "string", "enum": ["high", "medium", "low"]},
            mitigationPlan=STRING,
            contingencyPlan=STRING,
            owner=STRING,
        ),
        criticalRisks=array_of(risk=STRING, mitigation=STRING, status=STRING),
        overallRiskLevel={"type": "string", "enum": ["high", "medium", "low"]},
        mitigationPlan=OBJECT,
    ),
    labels=["risk-assessment", "risk-management"],
)

decomposition_quality_scoring_task = _task(
    "decomposition-quality-scoring",
    title="Phase 13: Decomposition Quality Scoring - {projectName}",
    agent_name="quality-assessor",
    role="Principal architect specializing in microservices quality assessment",
    task="Evaluate overall decomposition strategy quality and completeness",
    instructions=[
        "Assess bounded context clarity and domain alignment (weight: 15%)",
        "Evaluate service boundary quality and cohesion (weight: 20%)",
        "Assess coupling and dependency management (weight: 15%)",
        "Evaluate the data decomposition strategy (weight: 15%)",
        "Assess API contract completeness and design (weight: 10%)",
        "Evaluate migration strategy feasibility (weight: 15%)",
        "Assess risk mitigation completeness (weight: 10%)",
        "Calculate the weighted overall score (0-100)",
    ],
    output_format=(
        "JSON with overallScore (number 0-100), componentScores (object), gaps "
        "(array), recommendations (array), readinessAssessment (string), artifacts"
    ),
    output_schema=_result(
        ["overallScore", "componentScores", "recommendations", "readinessAssessment"],
        overallScore=SCORE,
        componentScores=OBJECT,
        gaps=array_of(area=STRING, gap=STRING, recommendation=STRING),
        recommendations=array_of(
            category=STRING, recommendation=STRING, priority=SEVERITY
        ),
        readinessAssessment={
            "type": "string",
            "enum": [
                "ready-to-proceed",
                "minor-refinements-needed",
                "major-refinements-needed",
                "not-ready",
            ],
        },
        strengths=STRINGS,
    ),
    labels=["quality-scoring", "assessment"],
)

strategy_document_task = _task(
    "strategy-document",
    title="Phase 14: Strategy Document - {projectName}",
    agent_name="technical-writer",
    role="Senior technical writer and enterprise architect",
    task="Generate comprehensive microservices decomposition strategy document",
    instructions=[
        "Write an executive summary with key recommendations",
        "Document the current state and the motivation for microservices",
        "Present bounded contexts, the service inventory and data decomposition",
        "Present the migration strategy, roadmap and risks",
        "Format as a Markdown document ready for stakeholder presentation",
    ],
    output_format=(
        "JSON with documentPath (string), executiveSummary (string), "
        "keyRecommendations (array), nextSteps (array), artifacts"
    ),
    output_schema=_result(
        ["documentPath", "executiveSummary", "keyRecommendations", "nextSteps"],
        documentPath=STRING,
        executiveSummary=STRING,
        keyRecommendations=array_of(
            recommendation=STRING, rationale=STRING, priority=STRING
        ),
        nextSteps=array_of(step=STRING, owner=STRING, timeline=STRING),
        criticalDecisions=STRINGS,
        successCriteria=STRINGS,
    ),
    labels=["documentation", "strategy-document"],
)

TASKS = (
    domain_analysis_task,
    service_boundary_task,
    dependency_analysis_task,
    data_decomposition_task,
    api_contract_design_task,
    cross_cutting_concerns_task,
    migration_strategy_task,
    service_prioritization_task,
    deployment_architecture_task,
    observability_strategy_task,
    migration_roadmap_task,
    risk_assessment_task,
    decomposition_quality_scoring_task,
    strategy_document_task,
)


# =============================================================================
# PROCESS
# =============================================================================


class DecompositionInputs(ProcessInputs):
    project_name: str
    current_architecture: dict[str, Any] = Field(default_factory=dict)
    business_domain: dict[str, Any] = Field(default_factory=dict)
    constraints: dict[str, Any] = Field(default_factory=dict)
    team_structure: dict[str, Any] = Field(default_factory=dict)
    output_dir: str = "microservices-decomposition-output"


@process(
    PROCESS_ID,
    description=(
        "Decompose a monolith into microservices along bounded contexts with a "
        "Strangler Fig migration roadmap"
    ),
    inputs_model=DecompositionInputs,
    outputs=(
        "success",
        "qualityScore",
        "qualityMet",
        "decompositionStrategy",
        "serviceInventory",
        "migrationRoadmap",
        "riskAssessment",
        "artifacts",
    ),
    tasks=TASKS,
)
def microservices_decomposition(
    inputs: DecompositionInputs, ctx: ProcessContext
) -> dict[str, Any]:
    start_time = ctx.now()
    artifacts: list[dict[str, Any]] = []
    project = inputs.project_name
    out = inputs.output_dir
    current = inputs.current_architecture
    constraints = inputs.constraints

    ctx.log("info", f"Starting Microservices Decomposition for {project}")

    ctx.log(
        "info",
        "Phase 1: Analyzing business domain and identifying bounded contexts",
    )
    domain = ctx.task(
        domain_analysis_task,
        {
            "projectName": project,
            "currentArchitecture": current,
            "businessDomain": inputs.business_domain,
            "outputDir": out,
        },
    )
    artifacts.extend(domain["artifacts"])

    contexts = domain["boundedContexts"]
    if len(contexts) < MIN_BOUNDED_CONTEXTS:
        ctx.log("warn", f"Only {len(contexts)} bounded context(s) identified")
        return {
            "success": False,
            "error": (
                "Insufficient bounded contexts identified. Microservices decomposition "
                "may not be appropriate for this system."
            ),
            "phase": "domain-analysis",
            "recommendation": (
                "Consider modular monolith or wait for system complexity to increase"
            ),
            "domainAnalysis": domain,
            "metadata": run_metadata(PROCESS_ID, start_time),
        }

    ctx.log("info", "Phase 2: Identifying optimal service boundaries and capabilities")
    boundaries = ctx.task(
        service_boundary_task,
        {
            "projectName": project,
            "domainAnalysis": domain,
            "currentArchitecture": current,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(boundaries["artifacts"])
    services = boundaries["services"]

    ctx.log(
        "info",
        "Phase 3: Analyzing dependencies and designing decoupling strategies",
    )
    dependencies = ctx.task(
        dependency_analysis_task,
        {
            "projectName": project,
            "currentArchitecture": current,
            "serviceBoundaries": boundaries,
            "domainAnalysis": domain,
            "outputDir": out,
        },
    )
    artifacts.extend(dependencies["artifacts"])

    ctx.breakpoint(
        question=(
            f"Domain analysis complete. Identified {len(contexts)} bounded contexts "
            "and "
            f"{len(services)} potential services. Review service boundaries and "
            "dependencies before proceeding?"
        ),
        title="Service Boundary Review",
        context={
            "projectName": project,
            "boundedContexts": contexts,
            "services": services,
            "dependencies": dependencies["dependencyGraph"],
        },
        files=file_refs(artifacts),
    )

    ctx.log(
        "info",
        "Phase 4: Designing data decomposition and database-per-service strategy",
    )
    data = ctx.task(
        data_decomposition_task,
        {
            "projectName": project,
            "currentArchitecture": current,
            "serviceBoundaries": boundaries,
            "dependencyAnalysis": dependencies,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(data["artifacts"])

    ctx.log(
        "info",
        "Phase 5: Designing inter-service API contracts and communication patterns",
    )
    api_contracts = ctx.task(
        api_contract_design_task,
        {
            "projectName": project,
            "serviceBoundaries": boundaries,
            "dependencyAnalysis": dependencies,
            "dataDecomposition": data,
            "outputDir": out,
        },
    )
    artifacts.extend(api_contracts["artifacts"])

    ctx.log(
        "info",
        "Phase 6: Designing cross-cutting concerns and infrastructure patterns",
    )
    cross_cutting = ctx.task(
        cross_cutting_concerns_task,
        {
            "projectName": project,
            "serviceBoundaries": boundaries,
            "currentArchitecture": current,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(cross_cutting["artifacts"])

    ctx.log(
        "info",
        "Phase 7: Designing incremental migration strategy using Strangler Fig pattern",
    )
    migration = ctx.task(
        migration_strategy_task,
        {
            "projectName": project,
            "currentArchitecture": current,
            "serviceBoundaries": boundaries,
            "dependencyAnalysis": dependencies,
            "dataDecomposition": data,
            "constraints": constraints,
            "teamStructure": inputs.team_structure,
            "outputDir": out,
        },
    )
    artifacts.extend(migration["artifacts"])

    ctx.log(
        "info",
        "Phase 8: Prioritizing services for extraction and sequencing migration waves",
    )
    prioritization = ctx.task(
        service_prioritization_task,
        {
            "projectName": project,
            "serviceBoundaries": boundaries,
            "dependencyAnalysis": dependencies,
            "migrationStrategy": migration,
            "constraints": constraints,
            "businessDomain": inputs.business_domain,
            "outputDir": out,
        },
    )
    artifacts.extend(prioritization["artifacts"])

    ctx.log(
        "info",
        "Phase 9: Designing deployment architecture and infrastructure requirements",
    )
    deployment = ctx.task(
        deployment_architecture_task,
        {
            "projectName": project,
            "serviceBoundaries": boundaries,
            "crossCuttingConcerns": cross_cutting,
            "constraints": constraints,
            "teamStructure": inputs.team_structure,
            "outputDir": out,
        },
    )
    artifacts.extend(deployment["artifacts"])

    ctx.log(
        "info",
        "Phase 10: Designing observability, monitoring, and operational strategy",
    )
    observability = ctx.task(
        observability_strategy_task,
        {
            "projectName": project,
            "serviceBoundaries": boundaries,
            "deploymentArchitecture": deployment,
            "crossCuttingConcerns": cross_cutting,
            "outputDir": out,
        },
    )
    artifacts.extend(observability["artifacts"])

    ctx.log(
        "info",
        "Phase 11: Creating detailed migration roadmap with phases and milestones",
    )
    roadmap = ctx.task(
        migration_roadmap_task,
        {
            "projectName": project,
            "servicePrioritization": prioritization,
            "migrationStrategy": migration,
            "dataDecomposition": data,
            "constraints": constraints,
            "teamStructure": inputs.team_structure,
            "outputDir": out,
        },
    )
    artifacts.extend(roadmap["artifacts"])

    ctx.log(
        "info",
        "Phase 12: Conducting comprehensive risk assessment and mitigation planning",
    )
    risks = ctx.task(
        risk_assessment_task,
        {
            "projectName": project,
            "currentArchitecture": current,
            "serviceBoundaries": boundaries,
            "migrationStrategy": migration,
            "migrationRoadmap": roadmap,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(risks["artifacts"])

    unmitigated = [
        r
        for r in risks["risks"]
        if r.get("severity") == "critical" and not r.get("mitigationPlan")
    ]
    if unmitigated:
        ctx.breakpoint(
            question=(
                f"{len(unmitigated)} critical risks lack mitigation plans. Should we "
                "develop mitigation strategies before proceeding?"
            ),
            title="Critical Risk Warning",
            context={
                "projectName": project,
                "criticalRisks": unmitigated,
                "recommendation": (
                    "Develop mitigation strategies for all critical risks before "
                    "proceeding"
                ),
            },
        )

    ctx.log(
        "info",
        "Phase 13: Evaluating decomposition strategy quality and completeness",
    )
    quality = ctx.task(
        decomposition_quality_scoring_task,
        {
            "projectName": project,
            "domainAnalysis": domain,
            "serviceBoundaries": boundaries,
            "dependencyAnalysis": dependencies,
            "dataDecomposition": data,
            "apiContracts": api_contracts,
            "migrationStrategy": migration,
            "migrationRoadmap": roadmap,
            "riskAssessment": risks,
            "outputDir": out,
        },
    )
    artifacts.extend(quality["artifacts"])
    overall_score = quality["overallScore"]
    quality_met = overall_score >= QUALITY_THRESHOLD

    ctx.log(
        "info",
        "Phase 14: Generating comprehensive decomposition strategy document",
    )
    document = ctx.task(
        strategy_document_task,
        {
            "projectName": project,
            "currentArchitecture": current,
            "businessDomain": inputs.business_domain,
            "constraints": constraints,
            "domainAnalysis": domain,
            "serviceBoundaries": boundaries,
            "dependencyAnalysis": dependencies,
            "dataDecomposition": data,
            "apiContracts": api_contracts,
            "crossCuttingConcerns": cross_cutting,
            "migrationStrategy": migration,
            "servicePrioritization": prioritization,
            "deploymentArchitecture": deployment,
            "observabilityStrategy": observability,
            "migrationRoadmap": roadmap,
            "riskAssessment": risks,
            "qualityScore": quality,
            "outputDir": out,
        },
    )
    artifacts.extend(document["artifacts"])

    total_duration = roadmap["timeline"].get("totalDuration")
    total_cost = roadmap["cost"].get("total")
    verdict = (
        "Strategy meets quality standards!"
        if quality_met
        else "Strategy may need refinement."
    )
    ctx.breakpoint(
        question=(
            f"Microservices decomposition strategy complete for {project}. Overall "
            "quality "
            f"score: {overall_score}/100. {verdict} Total services identified: "
            f"{len(services)}. Estimated migration duration: {total_duration}. "
            "Approve to proceed with implementation?"
        ),
        title="Decomposition Strategy Approval",
        context={
            "projectName": project,
            "overallScore": overall_score,
            "qualityMet": quality_met,
            "totalServices": len(services),
            "migrationWaves": len(roadmap["waves"]),
            "estimatedDuration": total_duration,
            "estimatedCost": total_cost,
            "criticalRisks": len(risks["criticalRisks"]),
        },
        files=file_refs(artifacts),
        summary={
            "boundedContexts": len(contexts),
            "services": len(services),
            "migrationWaves": len(roadmap["waves"]),
            "estimatedDuration": total_duration,
            "estimatedCost": total_cost,
            "qualityScore": overall_score,
        },
    )

    duration = ctx.now() - start_time
    return {
        "success": True,
        "projectName": project,
        "qualityScore": overall_score,
        "qualityMet": quality_met,
        "decompositionStrategy": {
            "domainAnalysis": {
                "boundedContexts": contexts,
                "domainEvents": domain["domainEvents"],
                "ubiquitousLanguage": domain["ubiquitousLanguage"],
            },
            "serviceBoundaries": {
                "services": services,
                "totalCount": len(services),
                "serviceTypes": boundaries["serviceTypes"],
            },
            "dependencyAnalysis": {
                "dependencyGraph": dependencies["dependencyGraph"],
                "couplingScore": dependencies["couplingScore"],
                "cohesionScore": dependencies["cohesionScore"],
            },
            "dataDecomposition": {
                "strategy": data["strategy"],
                "databases": data["databases"],
                "dataConsistencyPatterns": data["consistencyPatterns"],
            },
            "apiContracts": {
                "contracts": api_contracts["contracts"],
                "communicationPatterns": api_contracts["communicationPatterns"],
                "apiGatewayStrategy": api_contracts["apiGatewayStrategy"],
            },
            "crossCuttingConcerns": {
                "patterns": cross_cutting["patterns"],
                "infrastructure": cross_cutting["infrastructure"],
            },
        },
        "serviceInventory": [
            {
                "name": s.get("name"),
                "boundedContext": s.get("boundedContext"),
                "capabilities": s.get("capabilities", []),
                "priority": s.get("priority"),
                "complexity": s.get("complexity", s.get("estimatedComplexity")),
                "estimatedEffort": s.get("estimatedEffort"),
            }
            for s in services
        ],
        "migrationRoadmap": {
            "strategy": migration["approach"],
            "waves": roadmap["waves"],
            "timeline": roadmap["timeline"],
            "cost": roadmap["cost"],
            "phases": roadmap["phases"],
            "milestones": roadmap["milestones"],
        },
        "deployment": {
            "architecture": deployment["architecture"],
            "infrastructure": deployment["infrastructure"],
            "cicdPipeline": deployment["cicdPipeline"],
        },
        "observability": {
            "monitoring": observability["monitoring"],
            "logging": observability["logging"],
            "tracing": observability["tracing"],
            "alerting": observability["alerting"],
        },
        "riskAssessment": {
            "totalRisks": len(risks["risks"]),
            "criticalRisks": risks["criticalRisks"],
            "overallRiskLevel": risks["overallRiskLevel"],
            "mitigationPlan": risks["mitigationPlan"],
        },
        "strategyDocument": document["documentPath"],
        "artifacts": artifacts,
        "duration": duration,
        "metadata": run_metadata(
            PROCESS_ID, start_time, projectName=project, outputDir=out, version="1.0.0"
        ),
    }
