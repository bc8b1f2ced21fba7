"""
MCP Server for pool water pH adjustment calculations.

This server exposes the pool pH dosing engine as MCP tools: dose calculation
for raising or lowering pH, the chemical catalogue, and batch evaluation of
what-if scenarios and parameter sweeps.

Each tool lives in its own module under tools/ for easier maintenance.

Environment:
    POOL_CHEM_LOG_LEVEL: Logging level (default INFO)
    POOL_CHEM_LOG_FILE: Log file path (default debug.log, empty to disable)
"""

import logging
import os
from mcp.server.fastmcp import FastMCP

LOG_LEVEL = os.environ.get("POOL_CHEM_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.environ.get("POOL_CHEM_LOG_FILE", "debug.log")

handlers = [logging.StreamHandler()]
if LOG_FILE:
    handlers.append(logging.FileHandler(LOG_FILE))

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=handlers
)
logger = logging.getLogger("pool-ph-mcp")

# Initialize the MCP server
mcp = FastMCP("pool-ph-calculator")

from tools.ph_adjustment import calculate_ph_adjustment, list_ph_chemicals
from tools.batch_processing import batch_process_scenarios

mcp.tool()(calculate_ph_adjustment)     # Tool 1: Acid/base dose to reach a target pH
mcp.tool()(list_ph_chemicals)           # Tool 2: Chemical catalogue
mcp.tool()(batch_process_scenarios)     # Tool 3: What-if scenarios and parameter sweeps

from utils.constants import PH_CHEMICALS

if __name__ == "__main__":
    logger.info("Starting Pool pH MCP server...")
    logger.info(f"Log level: {LOG_LEVEL}, log file: {LOG_FILE or 'disabled'}")
    logger.info(f"Chemical catalogue: {', '.join(PH_CHEMICALS)}")

    logger.info("Registered 3 tools:")
    logger.info("  1. calculate_ph_adjustment: Dose, alkalinity impact and split plan for a pH change")
    logger.info("  2. list_ph_chemicals: Acids and bases the dosing engine supports")
    logger.info("  3. batch_process_scenarios: Parallel what-if scenarios and parameter sweeps")

    mcp.run()
