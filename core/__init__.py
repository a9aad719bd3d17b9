# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Configuration and structured logging shared by all components
# ============================================================================
