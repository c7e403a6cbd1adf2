"""
qa-scaffold E2E template suites.

These tests run against a live application and are skipped unless
``--run-e2e`` is given.

Test Modules:
    - test_web_template: Browser flows through the template page manager
    - test_api_template: API calls through the template API client

Running Tests:
    # Run all E2E tests
    pytest tests/e2e/ --run-e2e

    # Use another environment file
    pytest tests/e2e/ --run-e2e --env-file .env.staging

    # Run in headed mode with another browser
    E2E_HEADLESS=false E2E_BROWSER=firefox pytest tests/e2e/ --run-e2e

Environment Variables:
    BASE_URL: Base URL for the application under test
    API_BASE_URL: Base URL for its API
    MAIN_USER_LOGIN: Main user login
    MAIN_USER_PASSWORD: Main user password
"""
