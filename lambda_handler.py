"""
AWS Lambda Handler for the SkillPath API.

Wraps the FastAPI application with Mangum so that API Gateway and Function URL
requests are served by the same routes as the local server.

Lambda Configuration:
    Handler: lambda_handler.handler
    Runtime: Python 3.12
    Timeout: 29 seconds (API Gateway limit)
    Memory: 512 MB minimum (recommended for LLM operations)

Environment Variables:
    OPENAI_API_KEY: OpenAI API key (optional, fallbacks are used without it)
    DYNAMODB_TABLE_NAME: DynamoDB table for published profiles (default: "skillpath-profiles")
    S3_UPLOADS_BUCKET: S3 bucket for resumes and certificates
    SHARE_ORIGIN: Public frontend origin used in share links
    FRONTEND_URL: Frontend domain for CORS configuration (optional)
"""

from mangum import Mangum

from skillpath.api.server import app
from skillpath.utils.logger import get_logger

logger = get_logger(__name__)
logger.info("Lambda handler initialized")

# The .docx report is binary; every other response is text
api_handler = Mangum(
    app,
    lifespan="off",
    text_mime_types=[
        "application/json",
        "text/plain",
    ],
)


def handler(event, context):
    """Main Lambda handler, routes every HTTP event to the FastAPI app.

    Args:
        event: API Gateway or Function URL event.
        context: Lambda context object providing runtime information.

    Returns:
        dict: Mangum-formatted response with statusCode, headers and body.
    """
    return api_handler(event, context)
