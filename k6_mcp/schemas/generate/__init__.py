from .generate_request import (
    SourceKind,
    ScenarioType,
    StageConfig,
    PlannedStage,
    GenerateOptions,
    GenerationRequest
)
from .generated_script import (
    GeneratedScript,
    PersistedArtifact
)
