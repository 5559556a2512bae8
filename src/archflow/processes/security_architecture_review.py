"""
Security architecture review.

STRIDE threat modeling followed by attack-surface, security-pattern,
identity and data-protection analysis, a compliance check, a security test
strategy and a consolidated risk register with remediation plan.
"""

from typing import Any

from pydantic import Field

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessInputs, process
from archflow.domain.models import TaskContext, TaskDefinition
from archflow.domain.tasks import agent_task, define_task
from archflow.processes.common import (
    NUMBER,
    OBJECT,
    OBJECTS,
    STRING,
    STRINGS,
    array_of,
    run_metadata,
    schema,
)

PROCESS_ID = "software-architecture/security-architecture-review"

STRIDE = [
    "Spoofing",
    "Tampering",
    "Repudiation",
    "Information Disclosure",
    "Denial of Service",
    "Elevation of Privilege",
]

LIKELIHOOD = {"type": "string", "enum": ["Low", "Medium", "High"]}
LEVEL = {"type": "string", "enum": ["Low", "Medium", "High", "Critical"]}
COVERAGE = {"type": "string", "enum": ["Comprehensive", "Partial", "Minimal", "None"]}


def _required_items(required: list[str], **properties: Any) -> dict[str, Any]:
    return {"type": "array", "items": schema(required, **properties)}


def _vulnerabilities(*types: str) -> dict[str, Any]:
    return _required_items(
        ["id", "type", "severity", "description"],
        id=STRING,
        type={"type": "string", "enum": [*types, "Other"]},
        severity=LEVEL,
        description=STRING,
    )


RECOMMENDATIONS = array_of(priority=LEVEL, recommendation=STRING, rationale=STRING)


# =============================================================================
# TASKS
# =============================================================================


@define_task("create-threat-model")
def create_threat_model_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Create threat model using STRIDE methodology",
        agent_name="threat-modeler",
        role="security architect specializing in threat modeling",
        task=(
            "Create a comprehensive threat model for the system using STRIDE "
            "methodology (" + ", ".join(STRIDE) + ")"
        ),
        context=args,
        instructions=[
            "Identify all components, data flows and trust boundaries",
            "Apply STRIDE to each component and data flow",
            (
                "Assess likelihood (Low, Medium, High) and impact (Low, Medium, High, "
                "Critical)"
            ),
            "Create a data flow diagram highlighting security-critical paths",
            "Document assumptions and out-of-scope items",
            "Provide mitigation recommendations for each threat",
        ],
        output_format=(
            "JSON with STRIDE threat catalog, risk ratings, trust boundaries, "
            "data flow diagram, and mitigation recommendations"
        ),
        output_schema=schema(
            ["threats", "trustBoundaries", "dataFlows"],
            threats=_required_items(
                ["id", "category", "description", "likelihood", "impact", "riskLevel"],
                id=STRING,
                category={"type": "string", "enum": STRIDE},
                description=STRING,
                affectedComponent=STRING,
                likelihood=LIKELIHOOD,
                impact=LEVEL,
                riskLevel=LEVEL,
                mitigationRecommendation=STRING,
            ),
            trustBoundaries=array_of(
                name=STRING, description=STRING, components=STRINGS
            ),
            dataFlows=array_of(
                to=STRING, dataType=STRING, protocol=STRING, securityControls=STRINGS,
                **{"from": STRING},
            ),
            diagram=STRING,
            assumptions=STRINGS,
        ),
        labels=["agent", "security", "threat-modeling", "stride"],
    )


@define_task("identify-attack-surfaces")
def identify_attack_surfaces_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Identify and analyze attack surfaces",
        agent_name="attack-surface-analyzer",
        role="penetration testing specialist",
        task="Identify all attack surfaces in the system architecture",
        context=args,
        instructions=[
            "Identify external-facing components (APIs, web interfaces, mobile apps)",
            "Analyze network, human, software and physical attack surfaces",
            "Map each attack surface to the threat model",
            "Assess exposure level (Public, Partner, Internal, Restricted)",
            "Recommend attack surface reduction strategies",
        ],
        output_format=(
            "JSON with categorized attack surfaces, exposure levels, and reduction "
            "recommendations"
        ),
        output_schema=schema(
            ["surfaces"],
            surfaces=_required_items(
                ["id", "type", "component", "exposureLevel", "risks"],
                id=STRING,
                type={
                    "type": "string",
                    "enum": ["Network", "Human", "Software", "Physical"],
                },
                component=STRING,
                description=STRING,
                exposureLevel={
                    "type": "string",
                    "enum": ["Public", "Partner", "Internal", "Restricted"],
                },
                risks=STRINGS,
                reductionStrategies=STRINGS,
            ),
            summary=OBJECT,
        ),
        labels=["agent", "security", "attack-surface"],
    )


@define_task("review-security-patterns")
def review_security_patterns_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Review security patterns and best practices",
        agent_name="security-pattern-reviewer",
        role="security architecture expert",
        task="Review the architecture for security patterns and best practices",
        context=args,
        instructions=[
            (
                "Identify security patterns in use (Defense in Depth, Least "
                "Privilege, Fail Secure)"
            ),
            "Assess how each pattern is implemented",
            "Identify missing security patterns",
            "Review input validation, error handling and security logging",
            "Provide specific recommendations for pattern improvements",
        ],
        output_format="JSON with patterns identified, gaps, and recommendations",
        output_schema=schema(
            ["patterns", "gaps", "recommendations"],
            patterns=_required_items(
                ["name", "status", "assessment"],
                name=STRING,
                status={
                    "type": "string",
                    "enum": [
                        "Implemented",
                        "Partially Implemented",
                        "Not Implemented",
                        "Not Applicable",
                    ],
                },
                assessment=STRING,
                components=STRINGS,
            ),
            gaps=array_of(
                pattern=STRING, severity=LEVEL, description=STRING, impact=STRING
            ),
            recommendations=RECOMMENDATIONS,
        ),
        labels=["agent", "security", "patterns"],
    )


@define_task("assess-authentication-authorization")
def assess_auth_task(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Assess authentication and authorization mechanisms",
        agent_name="auth-specialist",
        role="identity and access management specialist",
        task="Comprehensively assess authentication and authorization architecture",
        context=args,
        instructions=[
            "Review authentication mechanisms (passwords, MFA, SSO, OAuth/OIDC)",
            "Evaluate session management and credential storage",
            "Review the authorization model (RBAC, ABAC, claims-based)",
            "Assess privilege escalation risks and least privilege adherence",
            "Check that every endpoint requires authentication",
            "Provide remediation recommendations prioritized by risk",
        ],
        output_format=(
            "JSON with authentication/authorization assessment, vulnerabilities, and "
            "recommendations"
        ),
        output_schema=schema(
            ["authentication", "authorization", "vulnerabilities", "recommendations"],
            authentication=schema(
                ["mechanisms", "strengths", "weaknesses"],
                mechanisms=STRINGS,
                strengths=STRINGS,
                weaknesses=STRINGS,
                mfaStatus=STRING,
            ),
            authorization=schema(
                ["model", "strengths", "weaknesses"],
                model=STRING,
                strengths=STRINGS,
                weaknesses=STRINGS,
            ),
            vulnerabilities=_vulnerabilities(
                "Broken Authentication",
                "Broken Access Control",
                "Privilege Escalation",
                "Session Fixation",
            ),
            recommendations=RECOMMENDATIONS,
        ),
        labels=["agent", "security", "authentication", "authorization"],
    )


@define_task("review-data-protection")
def review_data_protection_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Review data protection and encryption",
        agent_name="data-protection-specialist",
        role="data security and privacy expert",
        task="Review data protection mechanisms across the system",
        context=args,
        instructions=[
            "Identify sensitive data types (PII, PHI, PCI, credentials, secrets)",
            "Assess encryption at rest and in transit",
            "Review key management (generation, storage, rotation)",
            "Check for hardcoded secrets or credentials",
            "Check privacy controls (consent, data minimization, right to erasure)",
            "Provide prioritized recommendations",
        ],
        output_format=(
            "JSON with data inventory, protection assessment, vulnerabilities, and "
            "recommendations"
        ),
        output_schema=schema(
            [
                "dataInventory",
                "encryptionAtRest",
                "encryptionInTransit",
                "vulnerabilities",
                "recommendations",
            ],
            dataInventory=array_of(
                dataType=STRING,
                classification={
                    "type": "string",
                    "enum": ["Public", "Internal", "Confidential", "Restricted"],
                },
                storage=STRING,
                protectionMechanisms=STRINGS,
            ),
            encryptionAtRest=schema(
                ["status", "mechanisms"],
                status=COVERAGE,
                mechanisms=STRINGS,
                gaps=STRINGS,
            ),
            encryptionInTransit=schema(
                ["status", "protocols"],
                status=COVERAGE,
                protocols=STRINGS,
                tlsVersion=STRING,
                gaps=STRINGS,
            ),
            vulnerabilities=_vulnerabilities(
                "Sensitive Data Exposure",
                "Insufficient Encryption",
                "Poor Key Management",
                "Hardcoded Secrets",
            ),
            recommendations=RECOMMENDATIONS,
        ),
        labels=["agent", "security", "data-protection", "encryption"],
    )


@define_task("check-compliance")
def check_compliance_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Check compliance with security standards",
        agent_name="compliance-auditor",
        role="security compliance auditor",
        task=(
            "Assess architecture compliance with specified security standards and "
            "regulations"
        ),
        context=args,
        instructions=[
            "Review applicable standards (GDPR, HIPAA, PCI-DSS, SOC 2, ISO 27001)",
            "Map architecture controls to compliance requirements",
            "Assess data residency, audit logging and incident response",
            "Identify required evidence and artifacts",
            "Provide a compliance roadmap with remediation priorities",
        ],
        output_format=(
            "JSON with compliance assessment per standard, gaps, and remediation "
            "roadmap"
        ),
        output_schema=schema(
            ["status", "standards", "gaps", "roadmap"],
            status={
                "type": "string",
                "enum": [
                    "Compliant", "Partially Compliant", "Non-Compliant", "Not Assessed"
                ],
            },
            standards=_required_items(
                ["name", "status", "requirements"],
                name=STRING,
                status={
                    "type": "string",
                    "enum": [
                        "Compliant",
                        "Partially Compliant",
                        "Non-Compliant",
                        "Not Applicable",
                    ],
                },
                requirements=OBJECTS,
            ),
            gaps=array_of(
                standard=STRING,
                requirement=STRING,
                severity=LEVEL,
                description=STRING,
                remediation=STRING,
            ),
            roadmap=array_of(
                phase=STRING, priority=LEVEL, actions=STRINGS, estimatedEffort=STRING
            ),
        ),
        labels=["agent", "security", "compliance"],
    )


@define_task("perform-security-testing")
def perform_security_testing_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Define security testing strategy and test cases",
        agent_name="security-tester",
        role="security testing specialist",
        task=(
            "Define comprehensive security testing strategy based on threat model and "
            "attack surfaces"
        ),
        context=args,
        instructions=[
            "Design a security test plan covering all attack surfaces",
            "Define SAST, DAST, SCA and penetration testing scope",
            "Create test cases for the OWASP Top 10 and for modeled threats",
            "Recommend security testing tools and automation",
            "Provide a testing schedule and effort estimates",
        ],
        output_format=(
            "JSON with security test plan, test cases, tool recommendations, and "
            "findings"
        ),
        output_schema=schema(
            ["testPlan", "testCases", "toolRecommendations"],
            testPlan=OBJECT,
            testCases=_required_items(
                ["id", "category", "description", "priority"],
                id=STRING,
                category=STRING,
                description=STRING,
                priority=LEVEL,
                testType={
                    "type": "string",
                    "enum": [
                        "SAST",
                        "DAST",
                        "Manual Penetration Test",
                        "SCA",
                        "Infrastructure Scan",
                    ],
                },
                expectedResult=STRING,
            ),
            toolRecommendations=array_of(tool=STRING, purpose=STRING, priority=LEVEL),
            results=schema(
                [],
                summary=STRING,
                criticalFindings=NUMBER,
                highFindings=NUMBER,
                mediumFindings=NUMBER,
                lowFindings=NUMBER,
            ),
        ),
        labels=["agent", "security", "testing"],
    )


@define_task("generate-risk-register")
def generate_risk_register_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Generate comprehensive risk register and remediation plan",
        agent_name="risk-manager",
        role="security risk management specialist",
        task=(
            "Consolidate all security findings into a comprehensive risk register "
            "and create a prioritized remediation plan"
        ),
        context=args,
        instructions=[
            "Consolidate and deduplicate findings from all review phases",
            "Score each risk from likelihood and impact",
            "Choose a mitigation strategy per risk (Avoid, Reduce, Transfer, Accept)",
            "Group remediation actions into Immediate, Short-term and Long-term phases",
            "Identify quick wins (high impact, low effort)",
            "Define metrics for tracking remediation",
        ],
        output_format=(
            "JSON with comprehensive risk register, remediation plan, and tracking "
            "metrics"
        ),
        output_schema=schema(
            ["riskRegister", "remediationPlan", "metrics"],
            riskRegister=_required_items(
                ["id", "title", "severity", "riskScore", "category"],
                id=STRING,
                title=STRING,
                description=STRING,
                category=STRING,
                severity=LEVEL,
                likelihood=LIKELIHOOD,
                impact=LEVEL,
                riskScore=NUMBER,
                mitigationStrategy={
                    "type": "string",
                    "enum": ["Avoid", "Reduce", "Transfer", "Accept"],
                },
            ),
            remediationPlan=_required_items(
                ["id", "action", "priority", "phase"],
                id=STRING,
                riskIds=STRINGS,
                action=STRING,
                priority=LEVEL,
                phase={
                    "type": "string", "enum": ["Immediate", "Short-term", "Long-term"]
                },
                estimatedEffort=STRING,
                suggestedOwner=STRING,
            ),
            metrics=OBJECT,
        ),
        labels=["agent", "security", "risk-management", "remediation"],
    )


@define_task("create-final-report")
def create_final_report_task(
    args: dict[str, Any], task_ctx: TaskContext
) -> TaskDefinition:
    return agent_task(
        task_ctx,
        title="Create comprehensive security architecture review report",
        agent_name="security-report-writer",
        role="security documentation specialist",
        task=(
            "Create a comprehensive, executive-friendly security architecture review "
            "report"
        ),
        context=args,
        instructions=[
            "Write an executive summary of key findings and recommendations",
            "Summarize security posture and maturity level",
            "Highlight critical vulnerabilities, risks and compliance gaps",
            "Present the remediation plan with timeline and priorities",
            "Make the report actionable with clear next steps",
        ],
        output_format=(
            "JSON with report structure, executive summary, detailed sections, and "
            "appendices"
        ),
        output_schema=schema(
            ["executiveSummary", "sections", "nextSteps"],
            executiveSummary=OBJECT,
            sections=array_of(title=STRING, content=STRING, findings=OBJECTS),
            nextSteps=array_of(step=STRING, timeline=STRING, owner=STRING),
            appendices=array_of(title=STRING, content=STRING),
        ),
        labels=["agent", "security", "reporting"],
    )


# =============================================================================
# PROCESS
# =============================================================================


class SecurityReviewInputs(ProcessInputs):
    system: str
    architecture: dict[str, Any]
    security_requirements: dict[str, Any] = Field(default_factory=dict)
    compliance_standards: list[str] = Field(default_factory=list)


@process(
    PROCESS_ID,
    description=(
        "Security-focused architecture review including threat modeling, security "
        "pattern validation, and vulnerability assessment"
    ),
    inputs_model=SecurityReviewInputs,
    outputs=(
        "success",
        "threatModel",
        "securityRisks",
        "remediationPlan",
        "complianceStatus",
        "phases",
    ),
    tasks=(
        create_threat_model_task,
        identify_attack_surfaces_task,
        review_security_patterns_task,
        assess_auth_task,
        review_data_protection_task,
        check_compliance_task,
        perform_security_testing_task,
        generate_risk_register_task,
        create_final_report_task,
    ),
)
def security_architecture_review(
    inputs: SecurityReviewInputs, ctx: ProcessContext
) -> dict[str, Any]:
    start_time = ctx.now()
    phases: list[dict[str, Any]] = []
    system = inputs.system
    architecture = inputs.architecture

    def record(phase: str, result: dict[str, Any]) -> None:
        phases.append({"phase": phase, "completed": True, "result": result})

    ctx.log("info", "Phase 1: Creating threat model using STRIDE methodology")
    threat_model = ctx.task(
        create_threat_model_task,
        {
            "system": system,
            "architecture": architecture,
            "securityRequirements": inputs.security_requirements,
        },
    )
    record("threat-modeling", threat_model)

    ctx.breakpoint(
        question=(
            "Review the threat model. Does it accurately represent the security "
            "landscape?"
        ),
        title="Threat Model Review",
        files=[
            {"path": "artifacts/threat-model.json", "format": "json"},
            {"path": "artifacts/threat-model-diagram.md", "format": "markdown"},
        ],
    )

    shared = {
        "system": system, "architecture": architecture, "threatModel": threat_model
    }

    ctx.log(
        "info",
        (
            "Phase 2-3: Analyzing attack surfaces and reviewing security patterns in "
            "parallel"
        ),
    )
    attack_surfaces, security_patterns = ctx.parallel.all(
        [
            lambda: ctx.task(identify_attack_surfaces_task, shared),
            lambda: ctx.task(review_security_patterns_task, shared),
        ]
    )
    record("attack-surface-analysis", attack_surfaces)
    record("security-patterns-review", security_patterns)

    ctx.log(
        "info",
        (
            "Phase 4-5: Assessing authentication/authorization and data protection in "
            "parallel"
        ),
    )
    auth_assessment, data_protection = ctx.parallel.all(
        [
            lambda: ctx.task(assess_auth_task, shared),
            lambda: ctx.task(
                review_data_protection_task,
                {
                    "system": system,
                    "architecture": architecture,
                    "securityRequirements": inputs.security_requirements,
                },
            ),
        ]
    )
    record("auth-assessment", auth_assessment)
    record("data-protection-review", data_protection)

    ctx.log("info", "Phase 6: Checking compliance requirements")
    compliance = ctx.task(
        check_compliance_task,
        {
            **shared,
            "complianceStandards": inputs.compliance_standards,
            "authAssessment": auth_assessment,
            "dataProtection": data_protection,
        },
    )
    record("compliance-check", compliance)

    ctx.breakpoint(
        question="Review security findings. Proceed with security testing phase?",
        title="Security Findings Review",
        files=[
            {"path": "artifacts/security-findings.json", "format": "json"},
            {"path": "artifacts/security-findings-report.md", "format": "markdown"},
        ],
    )

    ctx.log("info", "Phase 7: Performing security testing")
    security_tests = ctx.task(
        perform_security_testing_task, {**shared, "attackSurfaces": attack_surfaces}
    )
    record("security-testing", security_tests)

    ctx.log("info", "Phase 8: Generating risk register and remediation plan")
    risk_register = ctx.task(
        generate_risk_register_task,
        {
            "system": system,
            "threatModel": threat_model,
            "attackSurfaces": attack_surfaces,
            "securityPatterns": security_patterns,
            "authAssessment": auth_assessment,
            "dataProtection": data_protection,
            "complianceCheck": compliance,
            "securityTests": security_tests,
        },
    )
    record("risk-remediation-planning", risk_register)

    ctx.log("info", "Phase 9: Creating final security architecture review report")
    final_report = ctx.task(
        create_final_report_task,
        {
            "system": system,
            "reviewResults": {
                "system": system, "startTime": start_time, "phases": phases
            },
            "riskRegisterAndPlan": risk_register,
        },
    )

    ctx.breakpoint(
        question=(
            "Review the final security architecture report. "
            "Approve findings and remediation plan?"
        ),
        title="Final Security Review Approval",
        files=[
            {
                "path": "artifacts/security-architecture-review-report.md",
                "format": "markdown",
            },
            {"path": "artifacts/risk-register.json", "format": "json"},
            {"path": "artifacts/remediation-plan.json", "format": "json"},
        ],
    )

    duration = ctx.now() - start_time
    return {
        "success": True,
        "processSlug": "security-architecture-review",
        "category": "operational-architecture",
        "system": system,
        "threatModel": threat_model,
        "securityRisks": risk_register["riskRegister"],
        "remediationPlan": risk_register["remediationPlan"],
        "complianceStatus": compliance["status"],
        "attackSurfaces": attack_surfaces["surfaces"],
        "securityPatterns": security_patterns["patterns"],
        "authAssessment": auth_assessment,
        "dataProtection": data_protection,
        "securityTests": security_tests.get("results"),
        "finalReport": final_report,
        "phases": phases,
        "duration": duration,
        "metadata": run_metadata(
            PROCESS_ID,
            start_time,
            specializationSlug="software-architecture",
            phaseCount=len(phases),
        ),
    }
