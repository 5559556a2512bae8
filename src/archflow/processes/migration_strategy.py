"""
Migration strategy planning.

Assesses the current system, defines the target state, analyzes gaps,
selects a migration approach (big-bang, strangler fig, parallel run,
phased) and plans risks, roadmap, data migration, testing, rollback,
change management and the business case before a final validation.
"""

import json
from typing import Any

from pydantic import Field

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessInputs, process
from archflow.domain.artifacts import file_refs
from archflow.domain.tasks import TaskTemplate
from archflow.processes.common import (
    ARTIFACTS,
    BOOLEAN,
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

PROCESS_ID = "software-architecture/migration-strategy"
MIN_COMPLETENESS = 70
QUALITY_THRESHOLD = 85

LEVEL = {"type": "string", "enum": ["critical", "high", "medium", "low"]}


def _task(task_id: str, *, labels: list[str], **kwargs: Any) -> TaskTemplate:
    return phase_task(task_id, labels=["migration-strategy", *labels], **kwargs)


def _result(required: list[str], **properties: Any) -> dict[str, Any]:
    return schema([*required, "artifacts"], artifacts=ARTIFACTS, **properties)


# =============================================================================
# TASKS
# =============================================================================

current_state_assessment_task = _task(
    "current-state-assessment",
    title="Phase 1: Current State Assessment - {projectName}",
    agent_name="architecture-analyst",
    role="senior software architect and systems analyst",
    task=(
        "Conduct comprehensive assessment of current system architecture, technology "
        "stack, and operational characteristics"
    ),
    instructions=[
        "Document the architecture style, components and integrations",
        "Inventory the technology stack with versions and support status",
        "Assess performance, scalability and reliability",
        "Quantify technical debt",
        "Document data stores, volumes and ownership",
        "List strengths and weaknesses",
        "Score how complete the available information is (0-100)",
    ],
    output_format=(
        "JSON with architecture, technology, components, integrations, technicalDebt, "
        "strengths, weaknesses, completenessScore, artifacts"
    ),
    output_schema=_result(
        ["architecture", "technology", "completenessScore"],
        architecture=OBJECT,
        technology=OBJECT,
        components=OBJECTS,
        integrations=OBJECTS,
        technicalDebt=OBJECT,
        strengths=STRINGS,
        weaknesses=STRINGS,
        completenessScore=SCORE,
    ),
    labels=["assessment", "current-state", "architecture-analysis"],
)

target_state_definition_task = _task(
    "target-state-definition",
    title="Phase 2: Target State Definition - {projectName}",
    agent_name="architecture-designer",
    role="principal software architect specializing in modern architecture patterns",
    task=(
        "Define comprehensive target architecture aligned with migration goals and "
        "constraints"
    ),
    instructions=[
        "Choose the target architecture pattern",
        "Select the target technology stack",
        "Define target components, integrations and data architecture",
        "Define target security, operations and cloud posture",
        "Score alignment with the migration goals (0-100)",
        "Produce a Mermaid diagram of the target architecture",
    ],
    output_format=(
        "JSON with architecturePattern, technology, components, capabilities, "
        "goalAlignmentScore, diagram, artifacts"
    ),
    output_schema=_result(
        ["architecturePattern", "technology", "goalAlignmentScore"],
        architecturePattern=STRING,
        technology=OBJECT,
        components=OBJECTS,
        capabilities=STRINGS,
        goalAlignmentScore=SCORE,
        diagram=STRING,
    ),
    labels=["target-state", "architecture-design", "planning"],
)

gap_analysis_task = _task(
    "gap-analysis",
    title="Phase 3: Gap Analysis - {projectName}",
    agent_name="gap-analyst",
    role=(
        "enterprise architect specializing in gap analysis and transformation planning"
    ),
    task="Conduct comprehensive gap analysis between current and target states",
    instructions=[
        "Compare current and target architecture, technology, data and skills",
        "Categorize gaps and rate their criticality",
        "Estimate the effort to close each gap",
        "Build a prioritization matrix by impact and effort",
    ],
    output_format=(
        "JSON with gaps (array), criticalGaps (array), gapsByCategory (object), "
        "totalEffort (string), prioritizationMatrix (object), artifacts"
    ),
    output_schema=_result(
        ["gaps", "criticalGaps", "totalEffort"],
        gaps=array_of(
            category=STRING, description=STRING, criticality=LEVEL, effort=STRING
        ),
        criticalGaps=OBJECTS,
        gapsByCategory=OBJECT,
        totalEffort=STRING,
        prioritizationMatrix=OBJECT,
    ),
    labels=["gap-analysis", "assessment", "planning"],
)

migration_strategy_selection_task = _task(
    "migration-strategy-selection",
    title="Phase 4: Migration Strategy Selection - {projectName}",
    agent_name="migration-strategist",
    role="migration architect specializing in large-scale system transformations",
    task=(
        "Select optimal migration strategy and approach based on gap analysis, "
        "goals, and constraints"
    ),
    instructions=[
        "Evaluate big-bang, strangler fig, parallel run and phased approaches",
        "Choose the migration pattern (rehost, replatform, refactor, rearchitect, "
        "rebuild, replace, retain)",
        "Document the alternatives considered and why they were not chosen",
        "Estimate cost and duration",
        "Check feasibility against budget, timeline and downtime constraints",
    ],
    output_format=(
        "JSON with approach, pattern, description, rationale, alternatives, "
        "estimatedCost, estimatedDuration, riskLevel, feasibilityAssessment, artifacts"
    ),
    output_schema=_result(
        ["approach", "pattern", "description", "rationale", "feasibilityAssessment"],
        approach={
            "type": "string",
            "enum": [
                "big-bang",
                "strangler-fig",
                "parallel-run",
                "phased-migration",
                "hybrid",
            ],
        },
        pattern={
            "type": "string",
            "enum": [
                "rehost",
                "replatform",
                "refactor",
                "rearchitect",
                "rebuild",
                "replace",
                "retain",
                "combined",
            ],
        },
        description=STRING,
        rationale=STRING,
        alternatives=array_of(
            approach=STRING, pros=STRINGS, cons=STRINGS, whyNotChosen=STRING
        ),
        estimatedCost=STRING,
        estimatedDuration=STRING,
        riskLevel={"type": "string", "enum": ["high", "medium", "low"]},
        feasibilityAssessment=schema(
            ["withinConstraints"],
            withinConstraints=BOOLEAN,
            budgetFeasibility=STRING,
            timelineFeasibility=STRING,
            violations=STRINGS,
            adjustments=STRINGS,
        ),
    ),
    labels=["strategy-selection", "decision-making", "planning"],
)

migration_risk_assessment_task = _task(
    "migration-risk-assessment",
    title="Phase 5: Migration Risk Assessment - {projectName}",
    agent_name="risk-analyst",
    role="enterprise risk analyst specializing in migration and transformation risks",
    task="Conduct comprehensive risk assessment for migration strategy",
    instructions=[
        "Identify technical, operational, business, security, schedule and cost risks",
        "Rate likelihood, impact and severity",
        "Write a mitigation plan and a contingency plan per risk",
        "Assign an owner and the affected migration phase",
    ],
    output_format=(
        "JSON with risks (array), criticalRisks (array), highRisks (array), "
        "overallRiskLevel (string), mitigationPlan (array), artifacts"
    ),
    output_schema=_result(
        ["risks", "criticalRisks", "overallRiskLevel", "mitigationPlan"],
        risks=array_of(
            riskId=STRING,
            category=STRING,
            description=STRING,
            likelihood={"type": "string", "enum": ["high", "medium", "low"]},
            impact=LEVEL,
            severity=LEVEL,
            mitigationPlan=STRING,
            contingencyPlan=STRING,
            owner=STRING,
            phase=STRING,
        ),
        criticalRisks=OBJECTS,
        highRisks=OBJECTS,
        overallRiskLevel={
            "type": "string", "enum": ["critical", "high", "medium", "low"]
        },
        mitigationPlan=OBJECTS,
    ),
    labels=["risk-assessment", "risk-management", "planning"],
)

migration_roadmap_task = _task(
    "migration-roadmap",
    title="Phase 6: Migration Roadmap Development - {projectName}",
    agent_name="roadmap-planner",
    role="migration program manager specializing in phased transformation roadmaps",
    task=(
        "Develop detailed phased migration roadmap with milestones, dependencies, "
        "and success criteria"
    ),
    instructions=[
        "Break the migration into phases with objectives and deliverables",
        "Define milestones with success criteria",
        "Map dependencies and the critical path",
        "Identify quick wins for early value",
    ],
    output_format=(
        "JSON with phases (array), timeline (object), dependencies (array), "
        "milestones (array), quickWins (array), criticalPath (array), artifacts"
    ),
    output_schema=_result(
        ["phases", "timeline", "milestones"],
        phases=array_of(
            phase=STRING, objectives=STRINGS, duration=STRING, deliverables=STRINGS
        ),
        timeline=schema([], totalDuration=STRING, startDate=STRING, endDate=STRING),
        dependencies=OBJECTS,
        milestones=array_of(
            milestone=STRING, targetDate=STRING, successCriteria=STRINGS
        ),
        quickWins=STRINGS,
        criticalPath=STRINGS,
    ),
    labels=["roadmap", "project-planning", "scheduling"],
)

data_migration_strategy_task = _task(
    "data-migration-strategy",
    title="Phase 7: Data Migration Strategy - {projectName}",
    agent_name="data-migration-specialist",
    role="data migration architect specializing in large-scale data transitions",
    task=(
        "Design comprehensive data migration strategy including extraction, "
        "transformation, loading, and validation"
    ),
    instructions=[
        "Estimate data volume and choose online or offline migration",
        "Plan extraction, transformation and loading",
        "Plan reconciliation and validation of migrated data",
        "Estimate duration and required downtime",
    ],
    output_format=(
        "JSON with strategy, approach, dataVolume, extractionPlan, transformationPlan, "
        "loadingPlan, validationPlan, estimatedDuration, downtimeRequired, artifacts"
    ),
    output_schema=_result(
        ["strategy", "approach", "dataVolume", "estimatedDuration"],
        strategy=STRING,
        approach=STRING,
        dataVolume=STRING,
        extractionPlan=OBJECT,
        transformationPlan=OBJECT,
        loadingPlan=OBJECT,
        validationPlan=OBJECT,
        estimatedDuration=STRING,
        downtimeRequired=STRING,
    ),
    labels=["data-migration", "etl", "planning"],
)

migration_testing_strategy_task = _task(
    "migration-testing-strategy",
    title="Phase 8: Testing and Validation Strategy - {projectName}",
    agent_name="test-strategist",
    role="QA architect specializing in migration testing and validation",
    task=(
        "Design comprehensive testing strategy for migration including functional, "
        "performance, and acceptance testing"
    ),
    instructions=[
        "Define test levels (unit, integration, system, acceptance)",
        "Plan functional parity and performance comparison tests",
        "Plan data validation and user acceptance testing",
        "Define validation criteria for go-live",
    ],
    output_format=(
        "JSON with strategy, testLevels (array), validationCriteria (array), "
        "estimatedEffort (string), artifacts"
    ),
    output_schema=_result(
        ["strategy", "testLevels", "validationCriteria", "estimatedEffort"],
        strategy=STRING,
        testLevels=array_of(level=STRING, scope=STRING, tools=STRINGS),
        functionalTesting=OBJECT,
        performanceTesting=OBJECT,
        dataValidation=OBJECT,
        validationCriteria=STRINGS,
        estimatedEffort=STRING,
    ),
    labels=["testing", "validation", "quality-assurance"],
)

rollback_contingency_task = _task(
    "rollback-contingency",
    title="Phase 9: Rollback and Contingency Planning - {projectName}",
    agent_name="contingency-planner",
    role="migration risk specialist focusing on rollback and contingency planning",
    task=(
        "Design comprehensive rollback and contingency plans for migration failure "
        "scenarios"
    ),
    instructions=[
        "Define the conditions that trigger a rollback",
        "Write step-by-step rollback procedures per phase",
        "Plan data rollback and identify the point of no return",
        "Estimate rollback time",
    ],
    output_format=(
        "JSON with strategy, triggerConditions (array), rollbackSteps (array), "
        "dataRollback (object), estimatedRollbackTime (string), pointOfNoReturn "
        "(object), contingencyPlans (array), artifacts"
    ),
    output_schema=_result(
        ["strategy", "triggerConditions", "rollbackSteps", "estimatedRollbackTime"],
        strategy=STRING,
        triggerConditions=STRINGS,
        rollbackSteps=array_of(step=STRING, owner=STRING, duration=STRING),
        dataRollback=OBJECT,
        estimatedRollbackTime=STRING,
        pointOfNoReturn=OBJECT,
        contingencyPlans=OBJECTS,
    ),
    labels=["rollback", "contingency", "risk-mitigation"],
)

change_management_task = _task(
    "change-management",
    title="Phase 10: Organizational Change Management - {projectName}",
    agent_name="change-manager",
    role="organizational change management specialist",
    task=(
        "Develop comprehensive change management plan for migration including "
        "stakeholder management, training, and communication"
    ),
    instructions=[
        "Identify stakeholders and their concerns",
        "Plan communication cadence and channels",
        "Plan training and knowledge transfer",
        "Plan for resistance and post-migration support",
    ],
    output_format=(
        "JSON with stakeholders (array), communicationPlan (object), trainingPlan "
        "(object), knowledgeTransfer (object), estimatedEffort (string), artifacts"
    ),
    output_schema=_result(
        ["stakeholders", "communicationPlan", "trainingPlan", "estimatedEffort"],
        stakeholders=array_of(group=STRING, impact=STRING, concerns=STRINGS),
        communicationPlan=OBJECT,
        trainingPlan=OBJECT,
        knowledgeTransfer=OBJECT,
        resistanceManagement=OBJECT,
        estimatedEffort=STRING,
    ),
    labels=["change-management", "training", "communication"],
)

cost_benefit_analysis_task = _task(
    "cost-benefit-analysis",
    title="Phase 11: Cost-Benefit Analysis - {projectName}",
    agent_name="financial-analyst",
    role="IT financial analyst specializing in migration business cases",
    task="Conduct comprehensive cost-benefit analysis for migration strategy",
    instructions=[
        "Estimate one-off migration costs by category",
        "Compare ongoing costs of current and target states",
        "List benefits and quantify them where possible",
        "Calculate ROI, payback period and NPV",
    ],
    output_format=(
        "JSON with totalCost, costBreakdown (object), benefits (array), costSavings "
        "(object), roi (object), paybackPeriod (string), npv (object), businessCase, "
        "artifacts"
    ),
    output_schema=_result(
        ["totalCost", "costBreakdown", "benefits", "roi", "paybackPeriod"],
        totalCost=STRING,
        costBreakdown=OBJECT,
        benefits=array_of(
            benefit=STRING,
            category={
                "type": "string",
                "enum": [
                    "cost-savings",
                    "revenue-increase",
                    "efficiency",
                    "risk-reduction",
                    "strategic",
                ],
            },
            quantified=BOOLEAN,
            value=STRING,
        ),
        costSavings=OBJECT,
        roi=schema([], percentage=STRING, calculation=STRING, timeframe=STRING),
        paybackPeriod=STRING,
        npv=OBJECT,
        businessCase=STRING,
    ),
    labels=["cost-benefit", "financial-analysis", "business-case"],
)

strategy_document_generation_task = _task(
    "strategy-document-generation",
    title="Phase 12: Strategy Document Generation - {projectName}",
    agent_name="strategy-writer",
    role="senior technical writer and migration architect",
    task=(
        "Generate comprehensive, executive-ready migration strategy document "
        "consolidating all planning artifacts"
    ),
    instructions=[
        "Write an executive summary with the recommended approach",
        "Consolidate current state, target state, gaps and strategy",
        "Include roadmap, risks, rollback and the business case",
        "List critical decisions and next steps",
        "Score readiness for execution (0-100)",
    ],
    output_format=(
        "JSON with documentPath, executiveSummary, keyRecommendations (array), "
        "criticalDecisions (array), nextSteps (array), readinessScore (number 0-100), "
        "artifacts"
    ),
    output_schema=_result(
        ["documentPath", "executiveSummary", "keyRecommendations", "readinessScore"],
        documentPath=STRING,
        executiveSummary=STRING,
        keyRecommendations=STRINGS,
        criticalDecisions=STRINGS,
        nextSteps=STRINGS,
        readinessScore=SCORE,
    ),
    labels=["documentation", "strategy-document", "deliverable"],
)

strategy_validation_task = _task(
    "strategy-validation",
    title="Phase 13: Strategy Validation - {projectName}",
    agent_name="strategy-validator",
    role="principal architect and migration auditor",
    task=(
        "Validate migration strategy quality, completeness, and readiness for "
        "execution"
    ),
    instructions=[
        "Score each planning component (0-100)",
        "Check completeness of every artifact",
        "List gaps and recommendations",
        "Give an approval readiness verdict",
        "Calculate the overall score (0-100)",
    ],
    output_format=(
        "JSON with overallScore (number 0-100), componentScores (object), completeness "
        "(object), gaps (array), recommendations (array), approvalReadiness (string), "
        "strengths (array), artifacts"
    ),
    output_schema=_result(
        ["overallScore", "componentScores", "recommendations", "approvalReadiness"],
        overallScore=SCORE,
        componentScores=OBJECT,
        completeness=OBJECT,
        gaps=STRINGS,
        recommendations=STRINGS,
        approvalReadiness=STRING,
        strengths=STRINGS,
    ),
    labels=["validation", "quality-assurance", "approval"],
)

TASKS = (
    current_state_assessment_task,
    target_state_definition_task,
    gap_analysis_task,
    migration_strategy_selection_task,
    migration_risk_assessment_task,
    migration_roadmap_task,
    data_migration_strategy_task,
    migration_testing_strategy_task,
    rollback_contingency_task,
    change_management_task,
    cost_benefit_analysis_task,
    strategy_document_generation_task,
    strategy_validation_task,
)


# =============================================================================
# PROCESS
# =============================================================================


class MigrationInputs(ProcessInputs):
    project_name: str
    current_state: dict[str, Any] = Field(default_factory=dict)
    target_state: dict[str, Any] = Field(default_factory=dict)
    migration_goals: list[str] = Field(default_factory=list)
    constraints: dict[str, Any] = Field(default_factory=dict)
    output_dir: str = "migration-strategy-output"


@process(
    PROCESS_ID,
    description=(
        "Plan a system migration from current to target state with strategy "
        "selection, risks, roadmap, rollback and business case"
    ),
    inputs_model=MigrationInputs,
    outputs=(
        "success",
        "strategyScore",
        "qualityMet",
        "strategy",
        "migrationPlan",
        "risks",
        "costBenefit",
        "artifacts",
    ),
    tasks=TASKS,
)
def migration_strategy(inputs: MigrationInputs, ctx: ProcessContext) -> dict[str, Any]:
    start_time = ctx.now()
    artifacts: list[dict[str, Any]] = []
    project = inputs.project_name
    out = inputs.output_dir
    goals = inputs.migration_goals
    constraints = inputs.constraints

    ctx.log("info", f"Starting Migration Strategy Planning for {project}")

    ctx.log("info", "Phase 1: Assessing current system state and architecture")
    current = ctx.task(
        current_state_assessment_task,
        {
            "projectName": project,
            "currentState": inputs.current_state,
            "outputDir": out,
        },
    )
    artifacts.extend(current["artifacts"])

    completeness = current["completenessScore"]
    if completeness < MIN_COMPLETENESS:
        ctx.breakpoint(
            question=(
                f"Current state assessment completeness: {completeness}%. Additional "
                "discovery needed. Should we conduct deeper analysis before proceeding?"
            ),
            title="Current State Assessment Warning",
            context={
                "projectName": project,
                "assessment": current,
                "recommendation": (
                    "Conduct architecture discovery workshops and technical "
                    "documentation review"
                ),
            },
        )

    ctx.log("info", "Phase 2: Defining target architecture and technology stack")
    target = ctx.task(
        target_state_definition_task,
        {
            "projectName": project,
            "currentState": current,
            "targetState": inputs.target_state,
            "migrationGoals": goals,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(target["artifacts"])

    ctx.breakpoint(
        question=(
            f"Review target architecture for {project}. Target: "
            f"{target['architecturePattern']}. Alignment with goals: "
            f"{target['goalAlignmentScore']}%. Approve?"
        ),
        title="Target Architecture Review",
        context={"projectName": project, "targetDefinition": target},
        files=[
            {
                "path": "artifacts/phase2-target-architecture.json",
                "format": "json",
                "content": json.dumps(target, indent=2),
            },
            {
                "path": "artifacts/phase2-target-architecture-diagram.md",
                "format": "markdown",
                "content": target.get("diagram", ""),
            },
        ],
    )

    ctx.log(
        "info",
        "Phase 3: Conducting gap analysis between current and target states",
    )
    gaps = ctx.task(
        gap_analysis_task,
        {
            "projectName": project,
            "currentState": current,
            "targetState": target,
            "migrationGoals": goals,
            "outputDir": out,
        },
    )
    artifacts.extend(gaps["artifacts"])

    ctx.log("info", "Phase 4: Selecting optimal migration strategy and approach")
    strategy = ctx.task(
        migration_strategy_selection_task,
        {
            "projectName": project,
            "currentState": current,
            "targetState": target,
            "gapAnalysis": gaps,
            "migrationGoals": goals,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(strategy["artifacts"])

    feasibility = strategy["feasibilityAssessment"]
    if not feasibility["withinConstraints"]:
        ctx.breakpoint(
            question=(
                "Migration strategy exceeds constraints. Budget: "
                f"{strategy.get('estimatedCost')} vs {constraints.get('budget')}, "
                f"Timeline: {strategy.get('estimatedDuration')} vs "
                f"{constraints.get('timeline')}. Adjust strategy or constraints?"
            ),
            title="Migration Feasibility Warning",
            context={
                "projectName": project,
                "strategy": strategy,
                "constraintViolations": feasibility.get("violations", []),
                "recommendation": (
                    "Consider phased approach or adjust scope/constraints"
                ),
            },
        )

    ctx.log("info", "Phase 5: Conducting comprehensive migration risk assessment")
    risks = ctx.task(
        migration_risk_assessment_task,
        {
            "projectName": project,
            "currentState": current,
            "targetState": target,
            "migrationStrategy": strategy,
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
                    "Develop mitigation strategies for all critical risks"
                ),
            },
        )

    planned = {
        "projectName": project,
        "currentState": current,
        "targetState": target,
        "migrationStrategy": strategy,
    }

    ctx.log("info", "Phase 6: Developing phased migration roadmap")
    roadmap = ctx.task(
        migration_roadmap_task,
        {
            **planned,
            "gapAnalysis": gaps,
            "riskAssessment": risks,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(roadmap["artifacts"])

    ctx.log("info", "Phase 7: Planning data migration strategy")
    data_migration = ctx.task(
        data_migration_strategy_task,
        {
            **planned,
            "migrationRoadmap": roadmap,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(data_migration["artifacts"])

    ctx.log("info", "Phase 8: Developing testing and validation strategy")
    testing = ctx.task(
        migration_testing_strategy_task,
        {**planned, "migrationRoadmap": roadmap, "outputDir": out},
    )
    artifacts.extend(testing["artifacts"])

    ctx.log("info", "Phase 9: Designing rollback and contingency plans")
    rollback = ctx.task(
        rollback_contingency_task,
        {
            **planned,
            "migrationRoadmap": roadmap,
            "riskAssessment": risks,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(rollback["artifacts"])

    ctx.log("info", "Phase 10: Planning organizational change management")
    change = ctx.task(
        change_management_task,
        {**planned, "migrationRoadmap": roadmap, "outputDir": out},
    )
    artifacts.extend(change["artifacts"])

    ctx.log("info", "Phase 11: Conducting cost-benefit analysis")
    cost_benefit = ctx.task(
        cost_benefit_analysis_task,
        {
            **planned,
            "migrationRoadmap": roadmap,
            "migrationGoals": goals,
            "constraints": constraints,
            "outputDir": out,
        },
    )
    artifacts.extend(cost_benefit["artifacts"])

    plan = {
        **planned,
        "gapAnalysis": gaps,
        "riskAssessment": risks,
        "migrationRoadmap": roadmap,
        "dataMigrationStrategy": data_migration,
        "testingStrategy": testing,
        "rollbackPlan": rollback,
        "changeManagement": change,
        "costBenefitAnalysis": cost_benefit,
    }

    ctx.log("info", "Phase 12: Generating comprehensive migration strategy document")
    document = ctx.task(
        strategy_document_generation_task,
        {**plan, "migrationGoals": goals, "constraints": constraints, "outputDir": out},
    )
    artifacts.extend(document["artifacts"])

    ctx.log("info", "Phase 13: Validating migration strategy quality and completeness")
    validation = ctx.task(
        strategy_validation_task,
        {**plan, "strategyDocument": document, "outputDir": out},
    )
    artifacts.extend(validation["artifacts"])

    strategy_score = validation["overallScore"]
    quality_met = strategy_score >= QUALITY_THRESHOLD
    total_duration = roadmap["timeline"].get("totalDuration")
    roi = cost_benefit["roi"].get("percentage")
    verdict = (
        "Strategy meets quality standards!"
        if quality_met
        else "Strategy may need refinement."
    )

    ctx.breakpoint(
        question=(
            f"Migration strategy complete for {project}. Quality score: "
            f"{strategy_score}/100. {verdict} Total cost: {cost_benefit['totalCost']}, "
            f"Duration: {total_duration}, ROI: {roi}%. Approve to proceed?"
        ),
        title="Migration Strategy Approval",
        context={"projectName": project},
        files=file_refs(artifacts),
        summary={
            "strategyScore": strategy_score,
            "qualityMet": quality_met,
            "projectName": project,
            "migrationApproach": strategy["approach"],
            "totalPhases": len(roadmap["phases"]),
            "estimatedDuration": total_duration,
            "estimatedCost": cost_benefit["totalCost"],
            "expectedROI": roi,
            "criticalRisks": len(risks["criticalRisks"]),
            "documentPath": document["documentPath"],
        },
    )

    duration = ctx.now() - start_time
    return {
        "success": True,
        "projectName": project,
        "strategyScore": strategy_score,
        "qualityMet": quality_met,
        "strategy": {
            "approach": strategy["approach"],
            "pattern": strategy["pattern"],
            "description": strategy["description"],
            "rationale": strategy["rationale"],
            "feasibility": feasibility,
        },
        "currentState": {
            "architecture": current["architecture"],
            "technology": current["technology"],
            "completenessScore": completeness,
            "strengths": current.get("strengths", []),
            "weaknesses": current.get("weaknesses", []),
        },
        "targetState": {
            "architecture": target["architecturePattern"],
            "technology": target["technology"],
            "goalAlignment": target["goalAlignmentScore"],
            "capabilities": target.get("capabilities", []),
        },
        "gapAnalysis": {
            "totalGaps": len(gaps["gaps"]),
            "criticalGaps": gaps["criticalGaps"],
            "effortEstimate": gaps["totalEffort"],
        },
        "migrationPlan": {
            "phases": roadmap["phases"],
            "timeline": roadmap["timeline"],
            "dependencies": roadmap.get("dependencies", []),
            "milestones": roadmap["milestones"],
        },
        "dataMigration": {
            "strategy": data_migration["strategy"],
            "approach": data_migration["approach"],
            "estimatedDataVolume": data_migration["dataVolume"],
            "estimatedDuration": data_migration["estimatedDuration"],
        },
        "testing": {
            "strategy": testing["strategy"],
            "testLevels": testing["testLevels"],
            "validationCriteria": testing["validationCriteria"],
            "estimatedEffort": testing["estimatedEffort"],
        },
        "risks": {
            "totalRisks": len(risks["risks"]),
            "criticalRisks": risks["criticalRisks"],
            "highRisks": risks.get("highRisks", []),
            "overallRiskLevel": risks["overallRiskLevel"],
            "mitigationPlan": risks["mitigationPlan"],
        },
        "rollback": {
            "strategy": rollback["strategy"],
            "triggerConditions": rollback["triggerConditions"],
            "rollbackSteps": rollback["rollbackSteps"],
            "estimatedRollbackTime": rollback["estimatedRollbackTime"],
        },
        "changeManagement": {
            "stakeholders": change["stakeholders"],
            "trainingPlan": change["trainingPlan"],
            "communicationPlan": change["communicationPlan"],
            "estimatedEffort": change["estimatedEffort"],
        },
        "costBenefit": {
            "totalCost": cost_benefit["totalCost"],
            "breakdown": cost_benefit["costBreakdown"],
            "benefits": cost_benefit["benefits"],
            "roi": cost_benefit["roi"],
            "paybackPeriod": cost_benefit["paybackPeriod"],
        },
        "roadmap": roadmap,
        "strategyDocument": document["documentPath"],
        "artifacts": artifacts,
        "duration": duration,
        "metadata": run_metadata(
            PROCESS_ID, start_time, projectName=project, outputDir=out, version="1.0.0"
        ),
    }
