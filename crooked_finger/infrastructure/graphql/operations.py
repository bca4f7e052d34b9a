"""GraphQL query and mutation strings used by the services layer."""

# --- Auth ---

LOGIN = """
mutation Login($input: UserLoginInput!) {
    login(input: $input) {
        user {
            id
            email
            createdAt
        }
        accessToken
        tokenType
    }
}
"""

REGISTER = """
mutation Register($input: UserCreateInput!) {
    register(input: $input) {
        user {
            id
            email
            createdAt
        }
        accessToken
        tokenType
    }
}
"""

# --- Assistant ---

CHAT_WITH_ASSISTANT_ENHANCED = """
mutation ChatWithAssistantEnhanced($message: String!, $context: String) {
    chatWithAssistantEnhanced(message: $message, context: $context) {
        message
        diagramSvg
        diagramPng
        hasPattern
    }
}
"""

FETCH_YOUTUBE_TRANSCRIPT = """
mutation FetchYoutubeTranscript($videoUrl: String!, $languages: [String!]) {
    fetchYoutubeTranscript(videoUrl: $videoUrl, languages: $languages) {
        success
        videoId
        transcript
        wordCount
        language
        thumbnailUrl
        thumbnailUrlHq
        error
    }
}
"""

EXTRACT_PATTERN_FROM_TRANSCRIPT = """
mutation ExtractPatternFromTranscript($transcript: String!, $videoId: String, $thumbnailUrl: String) {
    extractPatternFromTranscript(transcript: $transcript, videoId: $videoId, thumbnailUrl: $thumbnailUrl) {
        success
        patternName
        patternNotation
        patternInstructions
        difficultyLevel
        materials
        estimatedTime
        videoId
        thumbnailUrl
        error
    }
}
"""

# --- Projects ---

_PROJECT_FIELDS = """
        id
        name
        patternText
        translatedText
        difficultyLevel
        estimatedTime
        yarnWeight
        hookSize
        notes
        isCompleted
        imageData
        createdAt
        updatedAt
"""

GET_PROJECTS = """
query GetProjects {
    projects {%s    }
}
""" % _PROJECT_FIELDS

GET_PROJECT = """
query GetProject($projectId: Int!) {
    project(projectId: $projectId) {%s    }
}
""" % _PROJECT_FIELDS

CREATE_PROJECT = """
mutation CreateProject($input: CrochetProjectInput!) {
    createProject(input: $input) {%s    }
}
""" % _PROJECT_FIELDS

UPDATE_PROJECT = """
mutation UpdateProject($projectId: Int!, $input: CrochetProjectUpdateInput!) {
    updateProject(projectId: $projectId, input: $input) {%s    }
}
""" % _PROJECT_FIELDS

DELETE_PROJECT = """
mutation DeleteProject($projectId: Int!) {
    deleteProject(projectId: $projectId)
}
"""

# --- Usage ---

AI_USAGE_DASHBOARD = """
query AIUsageDashboard {
    aiUsageDashboard {
        totalRequestsToday
        totalRemaining
        models {
            modelName
            currentUsage
            dailyLimit
            remaining
            percentageUsed
            priority
            useCase
            totalInputCharacters
            totalOutputCharacters
            totalInputTokens
            totalOutputTokens
        }
    }
}
"""
