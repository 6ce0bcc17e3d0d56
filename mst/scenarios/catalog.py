"""Oracle-driven scenarios.

Each factory returns a StateMachineConfig whose transitions are chosen by
the given oracle; the goal is reaching one terminal stage.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mst.machine import Instruction, StateMachineConfig, visited
from mst.policy import OraclePolicy

if TYPE_CHECKING:
    from mst.machine import StateMachine
    from mst.oracle import Oracle


def _record_issue(machine: StateMachine) -> None:
    machine.set_data("issue_identified", True)


def _record_escalation(machine: StateMachine) -> None:
    machine.set_data(
        "escalation_reason", "Complex technical issue beyond initial support scope"
    )


def customer_support_config(oracle: Oracle) -> StateMachineConfig:
    return StateMachineConfig(
        initial_state="Initial Contact",
        possible_states=[
            "Initial Contact",
            "Troubleshooting",
            "Escalation",
            "Resolution",
            "Follow-up",
        ],
        goal_predicate=visited("Resolution"),
        context_prompt=(
            "You are a customer support agent handling a technical issue. "
            "Guide the conversation through appropriate stages to resolve "
            "the customer's problem."
        ),
        instructions=[
            Instruction(
                condition=lambda m: (
                    m.state == "Troubleshooting" and not m.get_data("issue_identified")
                ),
                action=_record_issue,
                description="Identify the specific issue during troubleshooting",
            ),
            Instruction(
                condition=lambda m: (
                    m.state == "Escalation" and not m.get_data("escalation_reason")
                ),
                action=_record_escalation,
                description="Document the reason for escalation",
            ),
        ],
        transition_policy=OraclePolicy(oracle),
    )


def software_development_config(oracle: Oracle) -> StateMachineConfig:
    return StateMachineConfig(
        initial_state="Requirements Gathering",
        possible_states=[
            "Requirements Gathering",
            "Design",
            "Implementation",
            "Testing",
            "Deployment",
            "Maintenance",
        ],
        goal_predicate=visited("Deployment"),
        context_prompt=(
            "You are a project manager overseeing a software development "
            "project. Guide the project through its lifecycle stages."
        ),
        transition_policy=OraclePolicy(oracle),
    )


def ecommerce_purchase_config(oracle: Oracle) -> StateMachineConfig:
    return StateMachineConfig(
        initial_state="Browsing",
        possible_states=[
            "Browsing",
            "Add to Cart",
            "Checkout",
            "Payment",
            "Order Confirmation",
        ],
        goal_predicate=visited("Order Confirmation"),
        context_prompt=(
            "You are guiding a customer through an e-commerce purchase. Lead "
            "them through the typical stages of an online shopping experience."
        ),
        transition_policy=OraclePolicy(oracle),
    )


def medical_diagnosis_config(oracle: Oracle) -> StateMachineConfig:
    return StateMachineConfig(
        initial_state="Patient Intake",
        possible_states=[
            "Patient Intake",
            "Examination",
            "Lab Tests",
            "Diagnosis",
            "Treatment Plan",
            "Follow-up",
        ],
        goal_predicate=visited("Treatment Plan"),
        context_prompt=(
            "You are a doctor diagnosing a patient. Guide the medical process "
            "through appropriate stages to reach a diagnosis and treatment plan."
        ),
        transition_policy=OraclePolicy(oracle),
    )
