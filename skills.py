# skills.py
# This is our central "knowledge base" of recognised skills.

# Every entry is the canonical, lower-case label reported back to the user.
# Matching is case-insensitive; single tokens use word boundaries and
# multi-word or punctuated labels (".net", "c++", "ci/cd") use containment.

SKILL_LIST = (
    # --- Languages ---
    "python", "java", "javascript", "typescript", "c++", "c#", "ruby", "php",
    "swift", "kotlin", "golang", "rust", "scala", "matlab", "sas", "spss",
    "solidity", "sql", "html", "css", "sass",

    # --- Frameworks & libraries ---
    "react", "angular", "vue", "nextjs", "node", "nodejs", "express",
    "django", "flask", "fastapi", "spring boot", "hibernate", ".net",
    "flutter", "react native", "xamarin", "redux", "zustand", "tailwind",
    "bootstrap", "material ui", "webpack", "vite", "three.js", "d3.js",
    "chart.js", "graphql", "rest api", "microservices", "serverless",

    # --- Data & ML ---
    "pandas", "numpy", "scikit-learn", "tensorflow", "pytorch", "opencv",
    "machine learning", "deep learning", "nlp", "natural language processing",
    "computer vision", "bert", "gpt", "llm", "langchain", "rag",
    "vector database", "pinecone", "chromadb", "matplotlib", "seaborn",
    "plotly", "etl", "spark", "hadoop", "kafka", "airflow", "snowflake",
    "databricks", "data warehouse", "data lake", "data pipeline",
    "data modeling", "business intelligence", "data analytics",
    "data science", "statistics", "probability", "linear algebra", "calculus",
    "tableau", "power bi", "excel",

    # --- Databases ---
    "mongodb", "postgresql", "mysql", "redis", "dynamodb", "firebase",
    "supabase", "oracle",

    # --- Cloud & DevOps ---
    "aws", "azure", "gcp", "docker", "kubernetes", "terraform", "jenkins",
    "ci/cd", "git", "linux", "lambda", "s3", "ec2", "rds", "vercel",
    "netlify", "heroku", "digital ocean", "nginx", "apache",
    "load balancing", "caching",

    # --- Security & web3 ---
    "oauth", "jwt", "authentication", "authorization", "security",
    "blockchain", "web3", "ethereum", "smart contracts",

    # --- Mobile & graphics ---
    "ios", "android", "unity", "unreal",

    # --- Testing ---
    "selenium", "cypress", "jest", "mocha", "pytest", "unittest",

    # --- Enterprise tools ---
    "power automate", "sharepoint", "salesforce", "sap", "jira", "figma",
    "sketch", "photoshop", "illustrator",

    # --- Methodology & soft skills ---
    "agile", "scrum", "communication", "leadership", "teamwork",
    "problem solving", "critical thinking", "project management",
    "time management",
)
