"""
Infrastructure as Code review.

Reviews IaC (Terraform, CloudFormation, Pulumi, Ansible, CDK, Bicep) for
structure, security, compliance, resource configuration, cost, state
management, documentation and testability, then produces a report and an
implementation plan.

Each phase's agent reports `success`; a failed phase stops the review
with a `success: False` result carrying the phase details.
"""

import json
import shlex
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessInputs, process
from archflow.domain.artifacts import collect_artifacts
from archflow.domain.models import TaskContext, TaskDefinition
from archflow.domain.scoring import average, quality_threshold
from archflow.domain.tasks import agent_task, define_task, shell_task
from archflow.processes.common import (
    ARTIFACTS,
    BOOLEAN,
    INTEGER,
    NUMBER,
    OBJECT,
    OBJECTS,
    SCORE,
    STRING,
    STRINGS,
    failure,
    run_metadata,
    schema,
)

PROCESS_ID = "software-architecture/iac-review"

FINDING_SEVERITY = {
    "type": "string", "enum": ["critical", "high", "medium", "low", "info"]
}


def _findings(*required: str, **properties: Any) -> dict[str, Any]:
    return {
        "type": "array",
        "items": {
            "type": "object",
            "required": list(required),
            "properties": {"severity": FINDING_SEVERITY, **properties},
        },
    }


def _phase_schema(*required: str, **properties: Any) -> dict[str, Any]:
    return schema(
        ["success", *required, "artifacts"],
        success=BOOLEAN,
        artifacts=ARTIFACTS,
        **properties,
    )


def _labels(*extra: str) -> list[str]:
    return ["agent", "iac-review", *extra]


# =============================================================================
# TASKS
# =============================================================================


@define_task("structure-review")
def structure_review_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Review IaC Structure: {args['projectName']}",
        agent_name="iac-structure-reviewer",
        role=(
            "Senior DevOps Architect specialized in Infrastructure as Code best "
            "practices"
        ),
        task="Review the structure and organization of Infrastructure as Code files",
        context=args,
        instructions=[
            "Analyze directory structure and file organization",
            "Check module organization and reusability",
            "Verify naming conventions and consistency",
            "Review environment separation strategy",
            "Validate module versioning and dependencies",
            "Assess code duplication and DRY principles",
        ],
        output_format=(
            "JSON with success, score (0-100), findings (array), artifacts (array), "
            "recommendations"
        ),
        output_schema=_phase_schema(
            "score",
            "findings",
            score=SCORE,
            findings=_findings(
                "severity", "category", "message", "location",
                category=STRING, message=STRING, location=STRING,
            ),
            recommendations=STRINGS,
        ),
        labels=_labels("structure"),
    )


@define_task("security-scan")
def security_scan_task(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Security Scan: {args['projectName']}",
        agent_name="iac-security-scanner",
        role="Cloud Security Engineer specialized in Infrastructure as Code security",
        task="Perform comprehensive security scanning of IaC configurations",
        context=args,
        instructions=[
            f"Check against {args.get('securityStandards', 'CIS')} benchmarks",
            "Find overly permissive IAM policies and security groups",
            "Check encryption at rest and in transit",
            "Find publicly exposed resources",
            "Verify logging and audit trails are enabled",
        ],
        output_format=(
            "JSON with success, score, findings (severity, type, resource, issue, "
            "recommendation), artifacts"
        ),
        output_schema=_phase_schema(
            "score",
            "findings",
            score=SCORE,
            findings=_findings(
                "severity", "type", "resource", "issue", "recommendation",
                type=STRING, resource=STRING, issue=STRING, recommendation=STRING,
            ),
        ),
        labels=_labels("security"),
    )


@define_task("compliance-check")
def compliance_check_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Compliance Check: {', '.join(args['complianceRequirements'])}",
        agent_name="iac-compliance-checker",
        role="Compliance Auditor specialized in cloud infrastructure compliance",
        task="Verify IaC configurations meet compliance requirements",
        context=args,
        instructions=[
            "Map each compliance control to the resources it governs",
            "Check data residency, retention and access controls",
            "Report non-compliant resources with the violated control",
        ],
        output_format="JSON with success, score, findings, complianceStatus, artifacts",
        output_schema=_phase_schema(
            "score",
            "findings",
            score=SCORE,
            findings=_findings(
                "severity", control=STRING, resource=STRING, issue=STRING
            ),
            complianceStatus=OBJECT,
        ),
        labels=_labels("compliance"),
    )


@define_task("secrets-detection")
def secrets_detection_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Secrets Detection: {args['projectName']}",
        agent_name="iac-secrets-detector",
        role="Security Engineer specialized in secrets detection and management",
        task="Scan IaC files for exposed secrets, credentials, and sensitive data",
        context=args,
        instructions=[
            "Find hardcoded passwords, API keys, tokens and private keys",
            "Check variable defaults and example files",
            "Mark exposed secrets with type 'exposed-secret'",
            "Recommend a secrets manager integration for each finding",
        ],
        output_format="JSON with success, exposedSecretsCount, findings, artifacts",
        output_schema=_phase_schema(
            "exposedSecretsCount",
            "findings",
            exposedSecretsCount=INTEGER,
            findings=_findings(
                "severity", "type", "location", "secretType", "recommendation",
                type=STRING, location=STRING, secretType=STRING, recommendation=STRING,
            ),
        ),
        labels=_labels("security", "secrets"),
    )


@define_task("resource-validation")
def resource_validation_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Resource Validation: {args['projectName']}",
        agent_name="iac-resource-validator",
        role="Cloud Architect specialized in resource configuration and best practices",
        task=(
            "Validate resource configurations for correctness, availability, and "
            "resilience"
        ),
        context=args,
        instructions=[
            "Check multi-AZ and redundancy settings against availability needs",
            "Verify backups and disaster recovery configuration",
            "Check sizing, autoscaling and health checks",
            "Use category 'availability' for availability findings",
        ],
        output_format=(
            "JSON with success, score, findings (severity, category, resource, issue, "
            "recommendation), artifacts"
        ),
        output_schema=_phase_schema(
            "score",
            "findings",
            score=SCORE,
            findings=_findings(
                "severity", "category", "resource", "issue", "recommendation",
                category=STRING, resource=STRING, issue=STRING, recommendation=STRING,
            ),
        ),
        labels=_labels("resources"),
    )


@define_task("cost-estimation")
def cost_estimation_task(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Cost Estimation: {args['projectName']}",
        agent_name="iac-cost-estimator",
        role="Cloud FinOps Analyst specialized in infrastructure cost analysis",
        task="Estimate infrastructure costs and compare against budget",
        context=args,
        instructions=[
            "Estimate monthly cost per resource",
            "Break costs down by service and environment",
            "Compare the estimate against the budget",
            "Score cost efficiency 0-100",
        ],
        output_format=(
            "JSON with success, estimatedMonthlyCost, costBreakdown, score, artifacts"
        ),
        output_schema=_phase_schema(
            "estimatedMonthlyCost",
            "costBreakdown",
            estimatedMonthlyCost=NUMBER,
            costBreakdown=OBJECT,
            score=SCORE,
        ),
        labels=_labels("cost"),
    )


@define_task("cost-optimization")
def cost_optimization_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Cost Optimization: {args['projectName']}",
        agent_name="iac-cost-optimizer",
        role="Cloud FinOps Engineer specialized in cost optimization strategies",
        task="Identify cost optimization opportunities in IaC configurations",
        context=args,
        instructions=[
            "Find oversized and idle resources",
            "Recommend reserved capacity or savings plans where usage is steady",
            "Recommend storage tiering and lifecycle rules",
            "Estimate savings, effort and priority for each recommendation",
        ],
        output_format=(
            "JSON with success, recommendations, totalPotentialSavings, artifacts"
        ),
        output_schema=_phase_schema(
            "recommendations",
            "totalPotentialSavings",
            recommendations={
                "type": "array",
                "items": {
                    "type": "object",
                    "required": [
                        "description", "estimatedSavings", "effort", "priority"
                    ],
                    "properties": {
                        "description": STRING,
                        "estimatedSavings": NUMBER,
                        "effort": STRING,
                        "priority": STRING,
                    },
                },
            },
            totalPotentialSavings=NUMBER,
        ),
        labels=_labels("cost", "optimization"),
    )


@define_task("state-management-review")
def state_management_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"State Management Review: {args['projectName']}",
        agent_name="iac-state-reviewer",
        role="DevOps Engineer specialized in IaC state management and backends",
        task="Review state management configuration for safety and best practices",
        context=args,
        instructions=[
            "Check that a remote backend is configured",
            "Check that state locking is enabled",
            "Verify state encryption and access control",
            "Review state separation per environment",
        ],
        output_format=(
            "JSON with success, score, backendConfigured, lockingEnabled, findings, "
            "artifacts"
        ),
        output_schema=_phase_schema(
            "score",
            "backendConfigured",
            "lockingEnabled",
            "findings",
            score=SCORE,
            backendConfigured=BOOLEAN,
            lockingEnabled=BOOLEAN,
            findings=_findings(
                "severity", "category", "issue", "recommendation",
                category=STRING, issue=STRING, recommendation=STRING,
            ),
        ),
        labels=_labels("state"),
    )


@define_task("documentation-review")
def documentation_review_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Documentation Review: {args['projectName']}",
        agent_name="iac-documentation-reviewer",
        role="Technical Writer specialized in infrastructure documentation",
        task="Review IaC documentation for completeness and maintainability",
        context=args,
        instructions=[
            "Check README coverage for modules and environments",
            "Check variable and output descriptions",
            "Check runbooks for apply, rollback and recovery",
        ],
        output_format=(
            "JSON with success, score, documentationQuality, findings, artifacts"
        ),
        output_schema=_phase_schema(
            "score",
            "documentationQuality",
            "findings",
            score=SCORE,
            documentationQuality=STRING,
            findings=OBJECTS,
        ),
        labels=_labels("documentation"),
    )


def syntax_validation_command(iac_tool: str, iac_path: str) -> str:
    """Command that validates IaC syntax for a tool."""
    path = shlex.quote(iac_path)
    if iac_tool == "terraform":
        return f"cd {path} && terraform init -backend=false && terraform validate"
    if iac_tool == "cloudformation":
        template = shlex.quote(f"file://{iac_path}/template.yaml")
        return f"aws cloudformation validate-template --template-body {template}"
    return "echo " + shlex.quote(f"Syntax validation for {iac_tool} not implemented")


@define_task("syntax-validation")
def syntax_validation_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return shell_task(
        task_ctx,
        title=f"Syntax Validation: {args['iacTool']}",
        command=syntax_validation_command(args["iacTool"], args["iacPath"]),
        labels=["iac-review", "validation", "syntax"],
    )


@define_task("plan-validation")
def plan_validation_task(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Plan Validation: {args['projectName']}",
        agent_name="iac-plan-validator",
        role="DevOps Engineer specialized in infrastructure change validation",
        task="Generate and validate infrastructure plan for proposed changes",
        context=args,
        instructions=[
            "Generate an infrastructure plan (terraform plan or equivalent)",
            "Analyze resource additions, changes and deletions",
            "Identify potentially destructive changes",
            "Report plan errors in 'errors'",
        ],
        output_format="JSON with success, valid, planSummary, errors, artifacts",
        output_schema=_phase_schema(
            "valid",
            "planSummary",
            valid=BOOLEAN,
            planSummary=OBJECT,
            errors=STRINGS,
            destructiveChanges=STRINGS,
        ),
        labels=_labels("validation", "plan"),
    )


@define_task("iac-testing")
def iac_testing_task(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"IaC Testing: {args['projectName']}",
        agent_name="iac-tester",
        role="Test Engineer specialized in infrastructure testing",
        task="Validate IaC testing strategy and execute available tests",
        context=args,
        instructions=[
            "Find existing tests (terratest, kitchen, policy-as-code)",
            "Run or evaluate the available tests",
            "Recommend missing test coverage",
        ],
        output_format=(
            "JSON with success, testsPassed, testsFailed, coverage, artifacts"
        ),
        output_schema=_phase_schema(
            "testsPassed",
            "testsFailed",
            testsPassed=INTEGER,
            testsFailed=INTEGER,
            coverage=NUMBER,
        ),
        labels=_labels("testing"),
    )


@define_task("final-report-generation")
def final_report_task(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Final Review Report: {args['projectName']}",
        agent_name="iac-report-generator",
        role="Technical Lead specialized in infrastructure review reporting",
        task="Generate comprehensive IaC review report with executive summary",
        context=args,
        instructions=[
            "Summarize findings from every review phase",
            "Rank issues by risk and effort",
            "Compute an overall quality score 0-100",
            "Write an executive summary for leadership",
        ],
        output_format=(
            "JSON with success, overallQualityScore, executiveSummary, keyFindings, "
            "artifacts"
        ),
        output_schema=_phase_schema(
            "overallQualityScore",
            "executiveSummary",
            overallQualityScore=SCORE,
            executiveSummary=STRING,
            keyFindings=STRINGS,
        ),
        labels=_labels("reporting"),
    )


@define_task("implementation-plan")
def implementation_plan_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title=f"Implementation Plan: {args['projectName']}",
        agent_name="iac-implementation-planner",
        role="DevOps Lead specialized in infrastructure remediation planning",
        task="Create actionable implementation plan for addressing review findings",
        context=args,
        instructions=[
            "Group remediation work into prioritized phases",
            "Address critical security findings first",
            "Estimate effort and owners for each item",
        ],
        output_format="JSON with success, plan, artifacts",
        output_schema=_phase_schema("plan", plan=OBJECT),
        labels=_labels("planning"),
    )


# =============================================================================
# PROCESS
# =============================================================================


class IacConstraints(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    budget: float | None = 10000
    security_compliance: str = "SOC2"
    high_availability: bool = True
    disaster_recovery: bool = True


class IacReviewInputs(ProcessInputs):
    project_name: str
    # terraform, cloudformation, pulumi, ansible, cdk, bicep
    iac_tool: str = "terraform"
    iac_path: str = "./infrastructure"
    cloud_provider: str = "aws"  # aws, azure, gcp, multi-cloud
    review_scope: str = "comprehensive"  # quick, standard, comprehensive, ...
    constraints: IacConstraints = Field(default_factory=IacConstraints)
    existing_infrastructure: dict[str, Any] = Field(default_factory=dict)
    compliance_requirements: list[str] = Field(default_factory=list)
    output_dir: str = "iac-review-output"


def _json_file(path: str, data: Any) -> dict[str, Any]:
    return {"path": path, "format": "json", "content": json.dumps(data, indent=2)}


def _severe(findings: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [f for f in findings if f.get("severity") in ("high", "critical")]


@process(
    PROCESS_ID,
    description=(
        "Infrastructure as Code review covering best practices, security compliance, "
        "cost optimization, maintainability and operational excellence"
    ),
    inputs_model=IacReviewInputs,
    outputs=(
        "success",
        "reviewReport",
        "securityFindings",
        "costRecommendations",
        "qualityScore",
        "phaseScores",
        "summary",
        "artifacts",
    ),
    tasks=(
        structure_review_task,
        security_scan_task,
        compliance_check_task,
        secrets_detection_task,
        resource_validation_task,
        cost_estimation_task,
        cost_optimization_task,
        state_management_task,
        documentation_review_task,
        syntax_validation_task,
        plan_validation_task,
        iac_testing_task,
        final_report_task,
        implementation_plan_task,
    ),
)
def iac_review(inputs: IacReviewInputs, ctx: ProcessContext) -> dict[str, Any]:
    start_time = ctx.now()
    artifacts: list[dict[str, Any]] = []
    review_report: dict[str, Any] = {}
    security_findings: list[dict[str, Any]] = []
    constraints = inputs.constraints
    out = inputs.output_dir
    base = {
        "projectName": inputs.project_name,
        "iacTool": inputs.iac_tool,
        "iacPath": inputs.iac_path,
        "outputDir": out,
    }

    def stop(error: str, details: Any) -> dict[str, Any]:
        ctx.log("error", error)
        return failure(PROCESS_ID, start_time, error, details)

    ctx.log("info", f"Starting Infrastructure as Code Review for {inputs.project_name}")
    ctx.log(
        "info",
        f"IaC Tool: {inputs.iac_tool}, Cloud Provider: {inputs.cloud_provider}, "
        f"Review Scope: {inputs.review_scope}",
    )

    # Phase 1: structure
    ctx.log("info", "Phase 1: Reviewing IaC structure and organization")
    structure = ctx.task(
        structure_review_task, {**base, "cloudProvider": inputs.cloud_provider}
    )
    if not structure["success"]:
        return stop("Failed to complete IaC structure review", structure)
    artifacts.extend(structure["artifacts"])

    structure_issues = _severe(structure["findings"])
    if structure_issues:
        ctx.log(
            "warn",
            f"Found {len(structure_issues)} high/critical structural issues",
        )
        ctx.breakpoint(
            question=(
                f"Phase 1 Quality Gate: Found {len(structure_issues)} high/critical "
                "structural issues. Review and address before continuing?"
            ),
            title="IaC Structure Review Gate",
            context={
                "structureScore": structure["score"],
                "criticalIssues": len(structure_issues),
            },
            files=[_json_file(f"{out}/phase1-structure-review.json", structure)],
        )
    review_report["structureReview"] = structure

    # Phase 2: security, compliance and secrets
    ctx.log("info", "Phase 2: Conducting security compliance validation")
    standard = constraints.security_compliance or "SOC2"
    requirements = inputs.compliance_requirements or [standard]
    security_scan, compliance, secrets = ctx.parallel.all(
        [
            lambda: ctx.task(
                security_scan_task,
                {
                    **base,
                    "cloudProvider": inputs.cloud_provider,
                    "securityStandards": constraints.security_compliance or "CIS",
                },
            ),
            lambda: ctx.task(
                compliance_check_task,
                {
                    "projectName": inputs.project_name,
                    "iacPath": inputs.iac_path,
                    "complianceRequirements": requirements,
                    "outputDir": out,
                },
            ),
            lambda: ctx.task(
                secrets_detection_task,
                {
                    "projectName": inputs.project_name,
                    "iacPath": inputs.iac_path,
                    "outputDir": out,
                },
            ),
        ]
    )
    if not (security_scan["success"] and compliance["success"] and secrets["success"]):
        return stop(
            "Failed to complete security compliance validation",
            {
                "securityScan": security_scan,
                "complianceCheck": compliance,
                "secretsCheck": secrets,
            },
        )
    for result in (security_scan, compliance, secrets):
        security_findings.extend(result["findings"])
    artifacts.extend(collect_artifacts(security_scan, compliance, secrets))

    critical_security = [
        f
        for f in security_findings
        if f.get("severity") == "critical" or f.get("type") == "exposed-secret"
    ]
    if critical_security:
        ctx.log("error", f"Found {len(critical_security)} critical security issues")
        ctx.breakpoint(
            question=(
                f"Phase 2 Quality Gate: Found {len(critical_security)} CRITICAL "
                "security "
                "issues. These MUST be fixed before proceeding. Continue?"
            ),
            title="Critical Security Issues Gate",
            context={
                "criticalIssues": len(critical_security),
                "exposedSecrets": secrets["exposedSecretsCount"],
                "complianceScore": compliance["score"],
            },
            files=[
                _json_file(
                    f"{out}/phase2-security-report.json",
                    {
                        "securityScan": security_scan,
                        "complianceCheck": compliance,
                        "secretsCheck": secrets,
                        "criticalSecurityIssues": critical_security,
                    },
                )
            ],
        )
    review_report["securityReview"] = {
        "securityScan": security_scan,
        "complianceCheck": compliance,
        "secretsCheck": secrets,
    }

    # Phase 3: resource configuration
    ctx.log("info", "Phase 3: Validating resource configurations")
    resources = ctx.task(
        resource_validation_task,
        {
            **base,
            "cloudProvider": inputs.cloud_provider,
            "constraints": constraints.model_dump(by_alias=True),
        },
    )
    if not resources["success"]:
        return stop("Failed to complete resource configuration validation", resources)
    artifacts.extend(resources["artifacts"])

    availability_issues = [
        f
        for f in resources["findings"]
        if f.get("severity") == "high" and f.get("category") == "availability"
    ]
    if availability_issues and constraints.high_availability:
        ctx.log(
            "warn",
            (
                f"Found {len(availability_issues)} high-severity availability "
                "configuration issues"
            ),
        )
        ctx.breakpoint(
            question=(
                f"Phase 3 Quality Gate: Found {len(availability_issues)} availability "
                "issues, but high availability is required. Review configurations?"
            ),
            title="Resource Configuration Gate",
            context={
                "configScore": resources["score"],
                "availabilityIssues": len(availability_issues),
            },
            files=[_json_file(f"{out}/phase3-resource-validation.json", resources)],
        )
    review_report["resourceValidation"] = resources

    # Phase 4: cost
    ctx.log(
        "info",
        "Phase 4: Analyzing costs and identifying optimization opportunities",
    )
    cost_estimation, cost_optimization = ctx.parallel.all(
        [
            lambda: ctx.task(
                cost_estimation_task,
                {
                    **base,
                    "cloudProvider": inputs.cloud_provider,
                    "budget": constraints.budget,
                },
            ),
            lambda: ctx.task(
                cost_optimization_task,
                {
                    "projectName": inputs.project_name,
                    "iacPath": inputs.iac_path,
                    "cloudProvider": inputs.cloud_provider,
                    "currentCost": inputs.existing_infrastructure.get("monthlyCost", 0),
                    "outputDir": out,
                },
            ),
        ]
    )
    if not (cost_estimation["success"] and cost_optimization["success"]):
        return stop(
            "Failed to complete cost analysis",
            {"costEstimation": cost_estimation, "costOptimization": cost_optimization},
        )
    cost_recommendations = list(cost_optimization["recommendations"])
    artifacts.extend(collect_artifacts(cost_estimation, cost_optimization))

    estimated_cost = cost_estimation["estimatedMonthlyCost"]
    budget = constraints.budget
    budget_exceeded = False
    if budget and estimated_cost > budget:
        budget_exceeded = True
        overage = estimated_cost - budget
        overage_percent = f"{overage / budget * 100:.1f}"
        ctx.log(
            "warn",
            f"Estimated cost exceeds budget by ${overage} ({overage_percent}%)",
        )
        ctx.breakpoint(
            question=(
                f"Phase 4 Quality Gate: Estimated monthly cost (${estimated_cost}) "
                "exceeds "
                f"budget (${budget}) by ${overage}. Review cost optimizations?"
            ),
            title="Cost Budget Gate",
            context={
                "estimatedCost": estimated_cost,
                "budget": budget,
                "overage": overage,
                "overagePercent": overage_percent,
                "potentialSavings": cost_optimization["totalPotentialSavings"],
            },
            files=[
                _json_file(
                    f"{out}/phase4-cost-analysis.json",
                    {
                        "costEstimation": cost_estimation,
                        "costOptimization": cost_optimization,
                    },
                )
            ],
        )
    review_report["costAnalysis"] = {
        "costEstimation": cost_estimation,
        "costOptimization": cost_optimization,
    }

    # Phase 5: state management
    ctx.log("info", "Phase 5: Reviewing state management and backend configuration")
    state = ctx.task(
        state_management_task, {**base, "cloudProvider": inputs.cloud_provider}
    )
    if not state["success"]:
        return stop("Failed to complete state management review", state)
    artifacts.extend(state["artifacts"])

    state_issues = _severe(state["findings"])
    if state_issues:
        ctx.log(
            "warn",
            f"Found {len(state_issues)} high/critical state management issues",
        )
        ctx.breakpoint(
            question=(
                f"Phase 5 Quality Gate: Found {len(state_issues)} state management "
                "issues. "
                "These can lead to data loss or conflicts. Review?"
            ),
            title="State Management Gate",
            context={
                "stateScore": state["score"],
                "issues": len(state_issues),
                "backendConfigured": state["backendConfigured"],
                "lockingEnabled": state["lockingEnabled"],
            },
            files=[_json_file(f"{out}/phase5-state-management.json", state)],
        )
    review_report["stateManagement"] = state

    # Phase 6: documentation
    ctx.log("info", "Phase 6: Reviewing documentation and maintainability")
    documentation = ctx.task(documentation_review_task, base)
    if not documentation["success"]:
        return stop("Failed to complete documentation review", documentation)
    artifacts.extend(documentation["artifacts"])
    review_report["documentation"] = documentation

    # Phase 7: syntax, plan and tests
    ctx.log("info", "Phase 7: Testing IaC changes and validating deployments")
    syntax, plan, testing = ctx.parallel.all(
        [
            lambda: ctx.task(syntax_validation_task, base),
            lambda: ctx.task(plan_validation_task, base),
            lambda: ctx.task(iac_testing_task, base),
        ]
    )
    if not (syntax["success"] and plan["success"]):
        return stop(
            "Failed to complete IaC testing and validation",
            {
                "syntaxValidation": syntax,
                "planValidation": plan,
                "testingValidation": testing,
            },
        )
    artifacts.extend(collect_artifacts(syntax, plan, testing))

    validation_errors = [*syntax.get("errors", []), *plan.get("errors", [])]
    if validation_errors:
        ctx.log("error", f"Found {len(validation_errors)} validation errors")
        ctx.breakpoint(
            question=(
                f"Phase 7 Quality Gate: Found {len(validation_errors)} validation "
                "errors. "
                "IaC cannot be applied until these are fixed. Review?"
            ),
            title="Validation Errors Gate",
            context={
                "syntaxValid": syntax.get("valid"),
                "planValid": plan["valid"],
                "testsPassed": testing.get("testsPassed"),
                "testsFailed": testing.get("testsFailed"),
            },
            files=[
                _json_file(
                    f"{out}/phase7-validation-report.json",
                    {
                        "syntaxValidation": syntax,
                        "planValidation": plan,
                        "testingValidation": testing,
                    },
                )
            ],
        )
    review_report["testing"] = {
        "syntaxValidation": syntax,
        "planValidation": plan,
        "testingValidation": testing,
    }

    # Phase 8: report and quality gate
    ctx.log(
        "info",
        "Phase 8: Generating comprehensive review report and recommendations",
    )
    final_report = ctx.task(
        final_report_task,
        {
            "projectName": inputs.project_name,
            "iacTool": inputs.iac_tool,
            "cloudProvider": inputs.cloud_provider,
            "reviewScope": inputs.review_scope,
            "reviewReport": review_report,
            "securityFindings": security_findings,
            "costRecommendations": cost_recommendations,
            "constraints": constraints.model_dump(by_alias=True),
            "outputDir": out,
        },
    )
    if not final_report["success"]:
        return stop("Failed to generate final review report", final_report)
    artifacts.extend(final_report["artifacts"])
    quality_score = final_report["overallQualityScore"]

    phase_scores = {
        "structure": structure.get("score", 0),
        "security": average(
            [security_scan.get("score", 0), compliance.get("score", 0)]
        ),
        "resourceConfig": resources.get("score", 0),
        "cost": cost_estimation.get("score", 0),
        "stateManagement": state.get("score", 0),
        "documentation": documentation.get("score", 0),
        "testing": average(
            [100 if syntax.get("valid") else 0, 100 if plan["valid"] else 0]
        ),
    }
    threshold = quality_threshold(inputs.review_scope)
    critical_count = sum(
        1 for f in security_findings if f.get("severity") == "critical"
    )
    high_count = sum(1 for f in security_findings if f.get("severity") == "high")

    if quality_score < threshold:
        ctx.log(
            "warn",
            f"Overall quality score ({quality_score}) below threshold ({threshold})",
        )
        ctx.breakpoint(
            question=(
                f"Final Quality Gate: Overall quality score ({quality_score}/100) is "
                "below "
                f"threshold ({threshold}). Review recommendations and proceed with "
                "caution?"
            ),
            title="Final Quality Gate",
            context={
                "qualityScore": quality_score,
                "qualityThreshold": threshold,
                "phaseScores": phase_scores,
                "criticalIssues": critical_count,
                "highIssues": high_count,
                "costOverage": budget_exceeded,
            },
            files=[
                _json_file(f"{out}/final-review-report.json", final_report),
                {
                    "path": f"{out}/executive-summary.md",
                    "format": "markdown",
                    "content": final_report["executiveSummary"],
                },
            ],
        )

    ctx.log("info", "Generating implementation plan for addressing findings")
    implementation = ctx.task(
        implementation_plan_task,
        {
            "projectName": inputs.project_name,
            "reviewReport": review_report,
            "securityFindings": security_findings,
            "costRecommendations": cost_recommendations,
            "qualityScore": quality_score,
            "outputDir": out,
        },
    )
    artifacts.extend(implementation["artifacts"])

    duration = ctx.now() - start_time
    savings = cost_optimization["totalPotentialSavings"]
    ctx.log("info", f"Infrastructure as Code Review completed in {duration}ms")
    ctx.log("info", f"Overall Quality Score: {quality_score}/100")
    ctx.log(
        "info",
        f"Security Findings: {len(security_findings)} ({critical_count} critical)",
    )
    ctx.log(
        "info",
        (
            f"Cost Recommendations: {len(cost_recommendations)} (potential savings: "
            f"${savings})"
        ),
    )

    return {
        "success": True,
        "projectName": inputs.project_name,
        "iacTool": inputs.iac_tool,
        "cloudProvider": inputs.cloud_provider,
        "reviewScope": inputs.review_scope,
        "qualityScore": quality_score,
        "phaseScores": phase_scores,
        "reviewReport": review_report,
        "securityFindings": security_findings,
        "costRecommendations": cost_recommendations,
        "implementationPlan": implementation["plan"],
        "artifacts": artifacts,
        "summary": {
            "totalFindings": len(security_findings) + len(cost_recommendations),
            "criticalFindings": critical_count,
            "highFindings": high_count,
            "estimatedMonthlyCost": estimated_cost,
            "potentialSavings": savings,
            "budgetStatus": "over-budget" if budget_exceeded else "within-budget",
            "qualityGate": "passed" if quality_score >= threshold else "failed",
        },
        "duration": duration,
        "metadata": run_metadata(PROCESS_ID, start_time, duration=duration),
    }
