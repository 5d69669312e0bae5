"""
Design Prompts
Prompts for architecture diagrams and pseudocode.
"""


class DesignPrompts:
    """Prompts for architecture and pseudocode generation"""

    @staticmethod
    def get_architecture_prompt_template() -> str:
        """Get the template for a PlantUML system architecture diagram"""
        return """Generate a comprehensive PlantUML diagram for the system architecture based on the following project requirements, tasks, and user stories:

Epics: {epics}
Tasks: {tasks}
User Stories: {stories}

Guidelines:
1. Start the diagram with '@startuml' and end with '@enduml'.
2. Include and clearly show:
   - Frontend components and their interactions
   - Backend services and APIs
   - Middleware components
   - Databases and data stores
   - Authentication and authorization systems
   - External services and integrations
   - Network boundaries and security measures
   - Message queues or event buses if applicable
   - Caching mechanisms
   - Load balancers and scaling components
   - Monitoring and logging systems
   - User interactions and data flow
3. Use different shapes to distinguish between component types.
4. Include a legend to explain the symbols used.
5. Use appropriate PlantUML notation for different component types (e.g., [Component], database, cloud, etc.)
6. Show relationships and interactions between components using arrows and appropriate labels.
7. Group related components using packages or boundaries.
8. Use notes to explain important aspects or decisions in the architecture.
9. Ensure the diagram is detailed, comprehensive, and reflects all aspects of the system described in the epics, tasks, and user stories.
10. Properly label system components (e.g., specify which database, which servers, what frontend technology, etc.).

Your response must contain only valid PlantUML code, with no additional explanations or text before or after the diagram code."""

    @staticmethod
    def get_pseudocode_prompt_template() -> str:
        """Get the template for whole-project pseudocode"""
        return """Generate comprehensive pseudocode for the entire project based on the following epics, tasks, and user stories:

Epics: {epics}
Tasks: {tasks}
User Stories: {stories}

Guidelines for the pseudocode:
1. Use a clear and consistent structure that outlines the main components and their interactions.
2. Include high-level algorithms and logic flows without delving into specific programming language syntax.
3. Cover all major functionalities described in the epics, tasks, and user stories.
4. Use indentation to show hierarchy and structure.
5. Include comments to explain complex logic or important decisions.
6. Use plain English mixed with general programming concepts (e.g., loops, conditionals, functions).
7. Outline data structures and their purposes without implementing them in detail.
8. Describe API endpoints and their general functionality.
9. Include error handling and edge cases at a high level.
10. Outline any database operations or external service interactions conceptually.

Your response should be structured pseudocode that gives a comprehensive overview of the entire system's functionality."""
