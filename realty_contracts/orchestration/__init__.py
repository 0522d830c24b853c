"""Workflow orchestration."""

from realty_contracts.orchestration.orchestrator import ContractWorkflowOrchestrator, execute_contract_workflow

__all__ = ["ContractWorkflowOrchestrator", "execute_contract_workflow"]
