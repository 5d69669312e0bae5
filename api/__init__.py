"""
PlanForge HTTP API
FastAPI application exposing generation and Jira submission endpoints.
"""
