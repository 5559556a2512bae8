"""
Quality attributes workshop.

Facilitated elicitation of non-functional requirements: preparation,
brainstorming against a quality framework, measurable six-part scenarios,
MoSCoW prioritization with trade-offs, refinement, architecture mapping
and validation planning, closed by a weighted workshop assessment.
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
    NUMBER,
    OBJECT,
    SCORE,
    SEVERITY,
    STRING,
    STRINGS,
    array_of,
    run_metadata,
    schema,
)

PROCESS_ID = "software-architecture/quality-attributes-workshop"
QUALITY_TARGET = 85

WORKSHOP_WEIGHTS = {
    "preparation": 10,
    "participation": 10,
    "qualityAttributeCoverage": 20,
    "scenarioQuality": 20,
    "prioritization": 15,
    "architectureImplications": 15,
    "validationApproach": 10,
}

MOSCOW = {
    "type": "string", "enum": ["Must Have", "Should Have", "Could Have", "Won't Have"]
}
COMPLEXITY = {"type": "string", "enum": ["low", "medium", "high"]}


# =============================================================================
# TASKS
# =============================================================================


@define_task("workshop-preparation")
def workshop_preparation_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Prepare for quality attributes workshop",
        agent_name="workshop-facilitator",
        role="senior software architect and workshop facilitator",
        task=(
            "Prepare the quality attributes workshop: stakeholders, agenda and "
            "quality framework reference materials"
        ),
        context=args,
        instructions=[
            "Identify key stakeholders: business owners, technical leads, operations, "
            "security, UX",
            "Create a 2-4 hour agenda with objectives per phase",
            "Prepare a quality framework reference (ISO 25010 or FURPS+)",
            "Gather business context: purpose, target users, drivers, success metrics",
            "Prepare templates, examples and scenario formats",
            "Define ground rules and the collaboration setup",
        ],
        output_format=(
            "JSON with agenda, stakeholderList, qualityFrameworkReference, "
            "workshopMaterials, groundRules, collaborationSetup, artifacts"
        ),
        output_schema=schema(
            ["agenda", "stakeholderList", "qualityFrameworkReference", "artifacts"],
            agenda=schema(
                [],
                duration=STRING,
                phases=array_of(phase=STRING, duration=STRING, objectives=STRINGS),
            ),
            stakeholderList=array_of(
                name=STRING, role=STRING, perspective=STRING, criticalInput=STRING
            ),
            qualityFrameworkReference=schema(
                [],
                framework=STRING,
                categories=array_of(
                    category=STRING, description=STRING, examples=STRINGS
                ),
            ),
            workshopMaterials=array_of(material=STRING, purpose=STRING, format=STRING),
            groundRules=STRINGS,
            collaborationSetup=schema([], tools=STRINGS, approach=STRING),
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "workshop-preparation"],
    )


@define_task("system-context-presentation")
def system_context_presentation_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Establish system context and scope",
        agent_name="context-presenter",
        role="senior software architect and technical communicator",
        task=(
            "Create a system context presentation covering purpose, scope, business "
            "drivers, use cases and constraints"
        ),
        context=args,
        instructions=[
            "Describe system purpose and scope",
            "Explain the business drivers",
            "Identify target users and personas",
            "Outline key use cases and user journeys",
            (
                "Present known constraints: budget, timeline, technology mandates, "
                "regulation"
            ),
            "List integration points and success metrics",
            "Create a context diagram and short presentation materials",
        ],
        output_format=(
            "JSON with systemPurpose, businessDrivers, targetUsers, keyUseCases, "
            "constraints, integrationPoints, successMetrics, contextDiagram, "
            "presentationMaterials, artifacts"
        ),
        output_schema=schema(
            [
                "systemPurpose",
                "businessDrivers",
                "keyUseCases",
                "constraints",
                "artifacts",
            ],
            systemPurpose=STRING,
            businessDrivers=array_of(
                driver=STRING, importance=SEVERITY, description=STRING
            ),
            targetUsers=array_of(persona=STRING, role=STRING, needs=STRINGS),
            keyUseCases=array_of(useCase=STRING, priority=STRING, description=STRING),
            constraints=schema(
                [],
                budget=STRING,
                timeline=STRING,
                technology=STRINGS,
                regulatory=STRINGS,
                other=STRINGS,
            ),
            integrationPoints=STRINGS,
            successMetrics=STRINGS,
            contextDiagram=STRING,
            presentationMaterials={"type": "array"},
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "system-context"],
    )


@define_task("quality-attributes-brainstorm")
def quality_attributes_brainstorm_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Brainstorm quality attributes with stakeholders",
        agent_name="brainstorm-facilitator",
        role="workshop facilitator and quality attributes expert",
        task=(
            "Collect stakeholder concerns and categorize them into quality "
            "attribute categories"
        ),
        context=args,
        instructions=[
            "Walk each category of the quality framework with the stakeholders",
            "Record concerns with the stakeholder rationale behind them",
            "Group duplicate concerns under one attribute",
            "Note categories no stakeholder raised as gaps",
            "Summarize participation by role",
        ],
        output_format=(
            "JSON with qualityAttributes (array with category, concerns, "
            "stakeholderRationale), gaps, brainstormNotes, artifacts"
        ),
        output_schema=schema(
            ["qualityAttributes", "artifacts"],
            qualityAttributes=array_of(
                category=STRING,
                attribute=STRING,
                concerns=STRINGS,
                stakeholderRationale=STRING,
                source=STRING,
            ),
            gaps=array_of(attribute=STRING, reason=STRING),
            brainstormNotes=STRING,
            participationSummary=schema(
                [], totalParticipants=NUMBER, inputsByRole=OBJECT
            ),
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "brainstorming"],
    )


@define_task("scenario-definition")
def scenario_definition_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Define quality attribute scenarios with measurable criteria",
        agent_name="scenario-architect",
        role="software architect and quality scenarios specialist",
        task=(
            "Create concrete, measurable quality attribute scenarios using the "
            "template: "
            "Stimulus, Source, Environment, Artifact, Response, Response Measure"
        ),
        context=args,
        instructions=[
            "Write at least one scenario per quality attribute",
            "Fill all six scenario parts",
            "Make every response measure quantitative",
            "Mark whether each scenario is testable and list its assumptions",
            "Rate scenario complexity",
        ],
        output_format=(
            "JSON with scenarios (array with stimulus, source, environment, artifact, "
            "response, responseMeasure, qualityAttribute, testable, assumptions), "
            "scenarioCount, artifacts"
        ),
        output_schema=schema(
            ["scenarios", "scenarioCount", "artifacts"],
            scenarios=array_of(
                id=STRING,
                qualityAttribute=STRING,
                category=STRING,
                stimulus=STRING,
                source=STRING,
                environment=STRING,
                artifact=STRING,
                response=STRING,
                responseMeasure=STRING,
                testable=BOOLEAN,
                assumptions=STRINGS,
                complexity=COMPLEXITY,
            ),
            scenarioCount=NUMBER,
            scenariosByCategory={"type": "object", "additionalProperties": NUMBER},
            testabilityScore=SCORE,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "scenario-definition"],
    )


@define_task("scenario-prioritization")
def scenario_prioritization_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Prioritize scenarios and identify trade-offs",
        agent_name="prioritization-facilitator",
        role="workshop facilitator and prioritization expert",
        task=(
            "Prioritize scenarios using the MoSCoW method, identify conflicting "
            "quality attributes and document trade-offs"
        ),
        context=args,
        instructions=[
            "Assign each scenario a MoSCoW category",
            "Rate priority and business value",
            "Record stakeholder votes and consensus",
            "Identify conflicting attributes and document each trade-off decision",
            "Check feasibility against the constraints",
        ],
        output_format=(
            "JSON with prioritizedScenarios (array with moscowCategory, priority, "
            "businessValue), highPriorityScenarios, mustHaveScenarios, tradeoffs "
            "(array with conflictingAttributes, tradeoffDescription, decision, "
            "rationale), feasibilityAssessment, consensusScore, artifacts"
        ),
        output_schema=schema(
            [
                "prioritizedScenarios",
                "highPriorityScenarios",
                "mustHaveScenarios",
                "tradeoffs",
                "artifacts",
            ],
            prioritizedScenarios=array_of(
                scenarioId=STRING,
                scenario=STRING,
                qualityAttribute=STRING,
                moscowCategory=MOSCOW,
                priority=SEVERITY,
                businessValue=SEVERITY,
                stakeholderConsensus=BOOLEAN,
                votes=NUMBER,
            ),
            highPriorityScenarios={"type": "array"},
            mustHaveScenarios={"type": "array"},
            tradeoffs=array_of(
                conflictingAttributes=STRINGS,
                tradeoffDescription=STRING,
                scenarios=STRINGS,
                decision=STRING,
                rationale=STRING,
                mitigation=STRING,
            ),
            feasibilityAssessment=schema(
                [],
                feasibleScenarios=NUMBER,
                challengingScenarios=NUMBER,
                infeasibleScenarios=NUMBER,
                constraintViolations=STRINGS,
            ),
            consensusScore=SCORE,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "prioritization"],
    )


@define_task("scenario-refinement")
def scenario_refinement_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Refine and detail high-priority scenarios",
        agent_name="scenario-refiner",
        role="software architect and requirements specialist",
        task=(
            "Refine high-priority scenarios with acceptance criteria, measurement "
            "approach, dependencies and implementation considerations"
        ),
        context=args,
        instructions=[
            "Refine every Must Have and high-priority scenario",
            "Write acceptance criteria with thresholds",
            "Define how and how often each scenario is measured",
            "Choose a test strategy and note whether it can be automated",
            "List dependencies, effort, complexity and risks",
        ],
        output_format=(
            "JSON with refinedScenarios (array with scenarioId, "
            "detailedAcceptanceCriteria, measurementApproach, testStrategy, "
            "dependencies, implementationNotes, effort, risks), artifacts"
        ),
        output_schema=schema(
            ["refinedScenarios", "artifacts"],
            refinedScenarios=array_of(
                scenarioId=STRING,
                qualityAttribute=STRING,
                originalScenario=STRING,
                detailedAcceptanceCriteria=array_of(
                    criterion=STRING, threshold=STRING, measurement=STRING
                ),
                measurementApproach=schema(
                    [], method=STRING, tools=STRINGS, frequency=STRING
                ),
                testStrategy=schema(
                    [], testType=STRING, testApproach=STRING, automatable=BOOLEAN
                ),
                dependencies=STRINGS,
                implementationNotes=STRING,
                architecturalConsiderations=STRINGS,
                effort={
                    "type": "string", "enum": ["low", "medium", "high", "very high"]
                },
                complexity=COMPLEXITY,
                risks=STRINGS,
            ),
            refinementSummary=schema(
                [],
                totalRefined=NUMBER,
                highEffortScenarios=NUMBER,
                highRiskScenarios=NUMBER,
                automatable=NUMBER,
            ),
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "scenario-refinement"],
    )


@define_task("architecture-mapping")
def architecture_mapping_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Map quality attributes to architecture implications",
        agent_name="architecture-strategist",
        role="principal software architect",
        task=(
            "Map quality attributes to the architectural patterns, tactics and design "
            "decisions that support them"
        ),
        context=args,
        instructions=[
            "For each quality attribute list supporting patterns and tactics",
            "Record design decisions with rationale, alternatives and trade-offs",
            "Suggest technology choices tied to the attributes they serve",
            "Name the architectural views stakeholders need",
            "Summarize the trade-off analysis",
        ],
        output_format=(
            "JSON with architectureImplications (object mapping QA to "
            "patterns/tactics), "
            "architecturalPatterns, designDecisions, technologyChoices, "
            "architecturalViews, tradeoffAnalysis, artifacts"
        ),
        output_schema=schema(
            [
                "architectureImplications",
                "architecturalPatterns",
                "designDecisions",
                "artifacts",
            ],
            architectureImplications={
                "type": "object",
                "additionalProperties": schema(
                    [],
                    qualityAttribute=STRING,
                    patterns=STRINGS,
                    tactics=STRINGS,
                    technologies=STRINGS,
                    designPrinciples=STRINGS,
                ),
            },
            architecturalPatterns=array_of(
                pattern=STRING,
                supportedQualityAttributes=STRINGS,
                description=STRING,
                applicability=STRING,
            ),
            designDecisions=array_of(
                decision=STRING,
                qualityAttribute=STRING,
                rationale=STRING,
                alternatives=STRINGS,
                tradeoffs=STRING,
            ),
            technologyChoices=array_of(
                technology=STRING, purpose=STRING, qualityAttributes=STRINGS
            ),
            architecturalViews=array_of(
                view=STRING, purpose=STRING, stakeholders=STRINGS
            ),
            tradeoffAnalysis=STRING,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "architecture-mapping"],
    )


@define_task("requirements-document-generation")
def requirements_document_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Generate comprehensive quality requirements document",
        agent_name="requirements-writer",
        role="senior technical writer and software architect",
        task=(
            "Generate a stakeholder-ready quality requirements document consolidating "
            "the workshop outcomes"
        ),
        context=args,
        instructions=[
            "Write an executive summary",
            "Document each quality attribute with its scenarios and priority",
            "Highlight critical scenarios and major trade-offs",
            "Include the architecture implications",
            "List next steps",
            "Format as a Markdown document",
        ],
        output_format=(
            "JSON with documentPath, executiveSummary, keyQualityAttributes, "
            "criticalScenarios, majorTradeoffs, nextSteps, artifacts"
        ),
        output_schema=schema(
            [
                "documentPath",
                "executiveSummary",
                "keyQualityAttributes",
                "nextSteps",
                "artifacts",
            ],
            documentPath=STRING,
            executiveSummary=STRING,
            keyQualityAttributes=STRINGS,
            criticalScenarios=array_of(
                scenario=STRING, qualityAttribute=STRING, priority=STRING
            ),
            majorTradeoffs=STRINGS,
            nextSteps=STRINGS,
            documentStructure=schema([], sections=STRINGS, pageCount=NUMBER),
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "documentation"],
    )


@define_task("validation-approach-definition")
def validation_approach_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Define validation and measurement approach",
        agent_name="validation-architect",
        role="quality assurance architect and testing strategist",
        task=(
            "Define how each quality attribute scenario is validated: testing "
            "strategies, tools, metrics and acceptance criteria"
        ),
        context=args,
        instructions=[
            "Pick a testing strategy and tools for each refined scenario",
            "Define metrics with units and targets",
            "Set validation frequency and acceptance thresholds",
            "Define quality gates and how they are enforced",
            "Plan continuous monitoring with dashboards and alerts",
        ],
        output_format=(
            "JSON with validationApproaches (array with scenario, testingStrategy, "
            "tools, "
            "metrics, frequency, acceptanceThreshold), validationRoadmap, "
            "qualityGates, "
            "monitoringPlan, artifacts"
        ),
        output_schema=schema(
            ["validationApproaches", "qualityGates", "artifacts"],
            validationApproaches=array_of(
                scenarioId=STRING,
                qualityAttribute=STRING,
                testingStrategy=schema(
                    [], approach=STRING, testType=STRING, automatable=BOOLEAN
                ),
                tools=STRINGS,
                metrics=array_of(metric=STRING, unit=STRING, target=STRING),
                frequency=STRING,
                acceptanceThreshold=STRING,
                baselineMeasurement=BOOLEAN,
            ),
            validationRoadmap=schema(
                [], phases=array_of(phase=STRING, activities=STRINGS, timeline=STRING)
            ),
            qualityGates=array_of(
                gate=STRING, criteria=STRINGS, threshold=STRING, enforcement=STRING
            ),
            monitoringPlan=schema(
                [], continuousMetrics=STRINGS, dashboards=STRINGS, alerts=STRINGS
            ),
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "validation"],
    )


@define_task("workshop-quality-assessment")
def workshop_quality_assessment_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Assess workshop quality and completeness",
        agent_name="workshop-evaluator",
        role="principal architect and workshop quality auditor",
        task=(
            "Assess workshop quality, completeness and readiness for the architecture "
            "design phase"
        ),
        context=args,
        instructions=[
            "Evaluate preparation thoroughness (weight: 10%)",
            "Assess stakeholder participation (weight: 10%)",
            "Review quality attribute coverage (weight: 20%)",
            "Assess scenario clarity, measurability and testability (weight: 20%)",
            "Evaluate prioritization consensus and rationale (weight: 15%)",
            "Review depth of architecture implications (weight: 15%)",
            "Assess the validation approach (weight: 10%)",
            "Calculate the weighted overall score (0-100)",
            "Check for missing critical attributes (performance, security, usability)",
            "Give recommendations and a readiness level",
        ],
        output_format=(
            "JSON with overallScore (number 0-100), componentScores (object), "
            "completeness (object), gaps (array), recommendations (array), "
            "readinessLevel (string), artifacts"
        ),
        output_schema=schema(
            ["overallScore", "componentScores", "recommendations", "artifacts"],
            overallScore=SCORE,
            componentScores=schema(
                [], **{key: NUMBER for key in WORKSHOP_WEIGHTS}
            ),
            completeness=schema(
                [],
                allCriticalQAsIdentified=BOOLEAN,
                scenariosAreMeasurable=BOOLEAN,
                prioritizationHasConsensus=BOOLEAN,
                architectureGuidanceProvided=BOOLEAN,
                validationApproachDefined=BOOLEAN,
            ),
            gaps=STRINGS,
            recommendations=STRINGS,
            readinessLevel={
                "type": "string",
                "enum": ["ready", "minor-refinement", "major-refinement"],
            },
            strengths=STRINGS,
            risks=STRINGS,
            artifacts=ARTIFACTS,
        ),
        labels=["agent", "quality-attributes", "validation", "quality-scoring"],
    )


TASKS = (
    workshop_preparation_task,
    system_context_presentation_task,
    quality_attributes_brainstorm_task,
    scenario_definition_task,
    scenario_prioritization_task,
    scenario_refinement_task,
    architecture_mapping_task,
    requirements_document_task,
    validation_approach_task,
    workshop_quality_assessment_task,
)


# =============================================================================
# PROCESS
# =============================================================================


class WorkshopInputs(ProcessInputs):
    system_name: str = "System"
    business_context: dict[str, Any] = Field(default_factory=dict)
    stakeholders: list[Any] = Field(default_factory=list)
    constraints: dict[str, Any] = Field(default_factory=dict)
    existing_requirements: list[Any] = Field(default_factory=list)
    output_dir: str = "quality-attributes-workshop-output"
    quality_framework: str = "ISO 25010"  # ISO 25010, FURPS+ or custom


@process(
    PROCESS_ID,
    description=(
        "Elicit, prioritize and specify quality attributes through measurable "
        "scenarios mapped to architecture implications"
    ),
    inputs_model=WorkshopInputs,
    outputs=(
        "success",
        "qualityAttributes",
        "scenarios",
        "prioritizedScenarios",
        "architectureImplications",
        "artifacts",
    ),
    tasks=TASKS,
)
def quality_attributes_workshop(
    inputs: WorkshopInputs, ctx: ProcessContext
) -> dict[str, Any]:
    start_time = ctx.now()
    artifacts: list[dict[str, Any]] = []
    system = inputs.system_name
    out = inputs.output_dir

    ctx.log("info", f"Starting Quality Attributes Workshop for {system}")

    ctx.log("info", "Phase 1: Preparing for quality attributes workshop")
    preparation = ctx.task(
        workshop_preparation_task,
        {
            "systemName": system,
            "businessContext": inputs.business_context,
            "stakeholders": inputs.stakeholders,
            "constraints": inputs.constraints,
            "qualityFramework": inputs.quality_framework,
            "outputDir": out,
        },
    )
    artifacts.extend(preparation["artifacts"])

    ctx.log("info", "Phase 2: Establishing system context and scope")
    system_context = ctx.task(
        system_context_presentation_task,
        {
            "systemName": system,
            "businessContext": inputs.business_context,
            "existingRequirements": inputs.existing_requirements,
            "constraints": inputs.constraints,
            "workshopPreparation": preparation,
            "outputDir": out,
        },
    )
    artifacts.extend(system_context["artifacts"])

    ctx.log("info", "Phase 3: Brainstorming quality attributes with stakeholders")
    brainstorm = ctx.task(
        quality_attributes_brainstorm_task,
        {
            "systemName": system,
            "businessContext": inputs.business_context,
            "stakeholders": inputs.stakeholders,
            "systemContextPresentation": system_context,
            "qualityFramework": inputs.quality_framework,
            "outputDir": out,
        },
    )
    artifacts.extend(brainstorm["artifacts"])
    quality_attributes = brainstorm["qualityAttributes"]

    ctx.log(
        "info",
        "Phase 4: Defining quality attribute scenarios with measurable criteria",
    )
    definition = ctx.task(
        scenario_definition_task,
        {
            "systemName": system,
            "qualityAttributes": quality_attributes,
            "stakeholders": inputs.stakeholders,
            "businessContext": inputs.business_context,
            "outputDir": out,
        },
    )
    artifacts.extend(definition["artifacts"])
    scenarios = definition["scenarios"]

    ctx.log("info", "Phase 5: Prioritizing scenarios and identifying trade-offs")
    prioritization = ctx.task(
        scenario_prioritization_task,
        {
            "systemName": system,
            "scenarios": scenarios,
            "stakeholders": inputs.stakeholders,
            "businessContext": inputs.business_context,
            "constraints": inputs.constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(prioritization["artifacts"])
    high_priority = prioritization.get("highPriorityScenarios") or []
    must_have = prioritization.get("mustHaveScenarios") or []
    tradeoffs = prioritization.get("tradeoffs") or []

    ctx.breakpoint(
        question=(
            "Quality attribute scenarios defined and prioritized. Total scenarios: "
            f"{len(scenarios)}, High priority: {len(high_priority)}. Review and "
            "approve "
            "prioritization?"
        ),
        title="Scenario Prioritization Review",
        files=file_refs(artifacts),
        summary={
            "systemName": system,
            "totalScenarios": len(scenarios),
            "highPriorityCount": len(high_priority),
            "mustHaveCount": len(must_have),
            "identifiedTradeoffs": len(tradeoffs),
            "qualityAttributesCount": len(quality_attributes),
        },
    )

    ctx.log("info", "Phase 6: Refining and detailing high-priority scenarios")
    refinement = ctx.task(
        scenario_refinement_task,
        {
            "systemName": system,
            "prioritizedScenarios": prioritization["prioritizedScenarios"],
            "highPriorityScenarios": high_priority,
            "mustHaveScenarios": must_have,
            "stakeholders": inputs.stakeholders,
            "outputDir": out,
        },
    )
    artifacts.extend(refinement["artifacts"])

    ctx.log("info", "Phase 7: Mapping quality attributes to architecture implications")
    mapping = ctx.task(
        architecture_mapping_task,
        {
            "systemName": system,
            "qualityAttributes": quality_attributes,
            "refinedScenarios": refinement["refinedScenarios"],
            "prioritizedScenarios": prioritization["prioritizedScenarios"],
            "businessContext": inputs.business_context,
            "constraints": inputs.constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(mapping["artifacts"])

    ctx.log("info", "Phase 8: Generating comprehensive quality requirements document")
    document = ctx.task(
        requirements_document_task,
        {
            "systemName": system,
            "businessContext": inputs.business_context,
            "stakeholders": inputs.stakeholders,
            "constraints": inputs.constraints,
            "qualityAttributes": quality_attributes,
            "scenarios": scenarios,
            "prioritizedScenarios": prioritization["prioritizedScenarios"],
            "refinedScenarios": refinement["refinedScenarios"],
            "tradeoffs": tradeoffs,
            "architectureImplications": mapping["architectureImplications"],
            "outputDir": out,
        },
    )
    artifacts.extend(document["artifacts"])

    ctx.log("info", "Phase 9: Defining validation and measurement approach")
    validation = ctx.task(
        validation_approach_task,
        {
            "systemName": system,
            "refinedScenarios": refinement["refinedScenarios"],
            "architectureImplications": mapping["architectureImplications"],
            "constraints": inputs.constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(validation["artifacts"])

    ctx.log("info", "Phase 10: Assessing workshop quality and completeness")
    assessment = ctx.task(
        workshop_quality_assessment_task,
        {
            "systemName": system,
            "workshopPreparation": preparation,
            "qualityAttributesBrainstorm": brainstorm,
            "scenarioDefinition": definition,
            "scenarioPrioritization": prioritization,
            "scenarioRefinement": refinement,
            "architectureMapping": mapping,
            "requirementsDocumentGeneration": document,
            "validationApproach": validation,
            "outputDir": out,
        },
    )
    artifacts.extend(assessment["artifacts"])

    workshop_score = assessment["overallScore"]
    weighted = weighted_score(assessment["componentScores"], WORKSHOP_WEIGHTS)
    quality_met = workshop_score >= QUALITY_TARGET
    patterns = mapping.get("architecturalPatterns") or []
    approaches = validation.get("validationApproaches") or []

    verdict = (
        "Workshop outcomes meet quality standards!"
        if quality_met
        else "Workshop may need additional refinement."
    )
    ctx.breakpoint(
        question=(
            "Quality Attributes Workshop complete. Quality score: "
            f"{workshop_score}/100. "
            f"{verdict} Review final outputs and approve?"
        ),
        title="Workshop Outcomes Review & Approval",
        files=file_refs(artifacts),
        summary={
            "workshopScore": workshop_score,
            "weightedScore": weighted,
            "qualityMet": quality_met,
            "systemName": system,
            "totalArtifacts": len(artifacts),
            "qualityAttributesIdentified": len(quality_attributes),
            "totalScenarios": len(scenarios),
            "highPriorityScenarios": len(high_priority),
            "architecturalPatterns": len(patterns),
            "tradeoffsIdentified": len(tradeoffs),
            "validationApproachesDefined": len(approaches),
        },
    )

    return {
        "success": True,
        "systemName": system,
        "workshopScore": workshop_score,
        "weightedScore": weighted,
        "qualityMet": quality_met,
        "qualityAttributes": quality_attributes,
        "qualityAttributesCount": len(quality_attributes),
        "scenarios": scenarios,
        "totalScenarios": len(scenarios),
        "prioritizedScenarios": prioritization["prioritizedScenarios"],
        "highPriorityScenarios": high_priority,
        "mustHaveScenarios": must_have,
        "refinedScenarios": refinement["refinedScenarios"],
        "tradeoffs": tradeoffs,
        "architectureImplications": mapping["architectureImplications"],
        "architecturalPatterns": patterns,
        "validationApproaches": approaches,
        "requirementsDocument": document["documentPath"],
        "artifacts": artifacts,
        "duration": ctx.now() - start_time,
        "metadata": run_metadata(
            PROCESS_ID,
            start_time,
            systemName=system,
            outputDir=out,
            qualityFramework=inputs.quality_framework,
        ),
    }
