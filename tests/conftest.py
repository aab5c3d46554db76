"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def gradle_like_records() -> list[dict]:
    """A library with tests plus a coverage-report module aggregating it."""
    return [
        {
            "name": "code-coverage-report",
            "plugins": ["base", "jacoco-report-aggregation"],
            "repositories": ["mavenCentral"],
            "dependencies": [{"target": ":lib", "scope": "aggregation"}],
            "testSuites": [
                {
                    "name": "testCodeCoverageReport",
                    "type": "aggregation-report",
                    "aggregates": "test",
                }
            ],
        },
        {
            "name": "lib",
            "plugins": ["groovy", "java", "jvm-test-suite", "jacoco"],
            "repositories": ["mavenCentral"],
            "dependencies": [
                {"target": "libs.groovy", "scope": "testImplementation"},
                {"target": "libs.spock.core", "scope": "testImplementation"},
                {"target": "libs.guice", "scope": "implementation"},
            ],
            "toolchainFloor": "21",
            "testSuites": [{"name": "test", "type": "unit", "engine": "spock"}],
        },
    ]


@pytest.fixture
def gradle_like_catalog() -> dict[str, str]:
    return {
        "groovy": "org.apache.groovy:groovy:4.0.15",
        "spock-core": "org.spockframework:spock-core:2.3-groovy-4.0",
        "guice": "com.google.inject:guice:7.0.0",
    }


@pytest.fixture
def descriptor_yml(tmp_path: Path) -> Path:
    """A valid buildplan.yml in a temp directory."""
    content = textwrap.dedent("""\
        catalog:
          guice: com.google.inject:guice:7.0.0
          spock-core:
            module: org.spockframework:spock-core
            version: 2.3-groovy-4.0

        modules:
          - name: app
            plugins: [java, application]
            dependencies:
              - target: ":lib"
            toolchainFloor: 17
            testSuites:
              - name: test
                type: unit
                engine: junit-jupiter

          - name: lib
            plugins: [groovy, java, jvm-test-suite, jacoco]
            repositories: [mavenCentral]
            dependencies:
              - target: libs.guice
                scope: implementation
              - target: libs.spock.core
                scope: testImplementation
            toolchainFloor: 21
            testSuites:
              - name: test
                type: unit
                engine: spock
    """)
    path = tmp_path / "buildplan.yml"
    path.write_text(content)
    return path
