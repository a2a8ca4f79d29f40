"""SQL quiz question bank.

Questions are organized by difficulty and cover various SQL concepts.
"""

from __future__ import annotations

from random import Random

from sql_quest.models.catalog import Difficulty, QuizQuestion

QUIZ_QUESTIONS: list[QuizQuestion] = [
    # Beginner
    QuizQuestion(
        id=1,
        difficulty=Difficulty.BEGINNER,
        category="SELECT",
        question="Which SQL command is used to retrieve data from a database?",
        options=["SELECT", "EXTRACT", "GET", "RETRIEVE"],
        correct_answer=0,
        explanation=(
            "SELECT is the primary SQL command used to retrieve data from database tables. "
            "It allows you to specify which columns and rows you want to see."
        ),
        sql_example="SELECT * FROM customers;",
    ),
    QuizQuestion(
        id=2,
        difficulty=Difficulty.BEGINNER,
        category="WHERE",
        question="What clause is used to filter records in SQL?",
        options=["FILTER", "WHERE", "HAVING", "CONDITION"],
        correct_answer=1,
        explanation=(
            "The WHERE clause is used to filter records based on specified conditions. "
            "It comes after the FROM clause in a SELECT statement."
        ),
        sql_example="SELECT * FROM products WHERE price > 50;",
    ),
    QuizQuestion(
        id=3,
        difficulty=Difficulty.BEGINNER,
        category="ORDER BY",
        question="How do you sort results in ascending order in SQL?",
        options=["SORT ASC", "ORDER BY ASC", "ORDER BY", "SORT BY"],
        correct_answer=2,
        explanation=(
            "ORDER BY is used to sort results. By default, it sorts in ascending order. "
            "You can also use ORDER BY column_name DESC for descending order."
        ),
        sql_example="SELECT * FROM customers ORDER BY last_name;",
    ),
    # Intermediate
    QuizQuestion(
        id=4,
        difficulty=Difficulty.INTERMEDIATE,
        category="JOINS",
        question="Which type of JOIN returns all records from both tables, even if there is no match?",
        options=["INNER JOIN", "LEFT JOIN", "FULL OUTER JOIN", "CROSS JOIN"],
        correct_answer=2,
        explanation=(
            "FULL OUTER JOIN returns all records from both tables. If there is no match, "
            "the result will contain NULL values for the missing side."
        ),
        sql_example="SELECT * FROM orders FULL OUTER JOIN customers ON orders.customer_id = customers.id;",
    ),
    QuizQuestion(
        id=5,
        difficulty=Difficulty.INTERMEDIATE,
        category="AGGREGATE",
        question="What function would you use to find the average price of all products?",
        options=["MEAN()", "AVERAGE()", "AVG()", "MEDIAN()"],
        correct_answer=2,
        explanation=(
            "AVG() is the SQL aggregate function used to calculate the average of a numeric "
            "column. It ignores NULL values in its calculation."
        ),
        sql_example="SELECT AVG(price) FROM products;",
    ),
    QuizQuestion(
        id=6,
        difficulty=Difficulty.INTERMEDIATE,
        category="GROUP BY",
        question="When using GROUP BY, what clause is used to filter grouped results?",
        options=["WHERE", "HAVING", "FILTER", "GROUP WHERE"],
        correct_answer=1,
        explanation=(
            "HAVING is used to filter results after grouping. WHERE filters individual rows "
            "before grouping, while HAVING filters groups after aggregation."
        ),
        sql_example="SELECT category_id, AVG(price) FROM products GROUP BY category_id HAVING AVG(price) > 100;",
    ),
    # Advanced
    QuizQuestion(
        id=7,
        difficulty=Difficulty.ADVANCED,
        category="SUBQUERIES",
        question="What is a subquery that returns multiple rows and columns called?",
        options=["Scalar subquery", "Column subquery", "Table subquery", "Row subquery"],
        correct_answer=2,
        explanation=(
            "A table subquery returns multiple rows and columns, essentially creating a "
            "temporary table that can be used in FROM clauses or JOINs."
        ),
        sql_example=(
            "SELECT * FROM (SELECT category_id, AVG(price) AS avg_price "
            "FROM products GROUP BY category_id) AS temp;"
        ),
    ),
    QuizQuestion(
        id=8,
        difficulty=Difficulty.ADVANCED,
        category="WINDOW FUNCTIONS",
        question="Which window function would you use to assign a unique rank to each row within a partition?",
        options=["ROW_NUMBER()", "RANK()", "DENSE_RANK()", "NTILE()"],
        correct_answer=0,
        explanation=(
            "ROW_NUMBER() assigns a unique sequential integer to each row within a partition, "
            "starting from 1. Unlike RANK(), it never produces ties."
        ),
        sql_example="SELECT name, price, ROW_NUMBER() OVER (ORDER BY price DESC) AS rank FROM products;",
    ),
    QuizQuestion(
        id=9,
        difficulty=Difficulty.ADVANCED,
        category="CTE",
        question="What does CTE stand for in SQL?",
        options=[
            "Common Table Expression",
            "Complex Table Element",
            "Conditional Table Extension",
            "Custom Table Entity",
        ],
        correct_answer=0,
        explanation=(
            "CTE stands for Common Table Expression. It allows you to define a temporary named "
            "result set that exists within the scope of a single statement."
        ),
        sql_example=(
            "WITH order_totals AS (SELECT customer_id, SUM(total_amount) AS spent "
            "FROM orders GROUP BY customer_id) SELECT * FROM order_totals;"
        ),
    ),
    # Expert
    QuizQuestion(
        id=10,
        difficulty=Difficulty.EXPERT,
        category="PERFORMANCE",
        question="Which of the following is NOT a good practice for SQL performance optimization?",
        options=[
            "Using indexes on frequently queried columns",
            "Avoiding SELECT * in production queries",
            "Using subqueries instead of JOINs when possible",
            "Limiting result sets with WHERE clauses",
        ],
        correct_answer=2,
        explanation=(
            "Using subqueries instead of JOINs is generally NOT a good practice. JOINs are "
            "typically more efficient and readable than equivalent subqueries."
        ),
        sql_example="SELECT * FROM orders o JOIN customers c ON o.customer_id = c.id;",
    ),
    QuizQuestion(
        id=11,
        difficulty=Difficulty.EXPERT,
        category="TRANSACTIONS",
        question="What does ACID stand for in database transactions?",
        options=[
            "Atomicity, Consistency, Isolation, Durability",
            "Accuracy, Consistency, Integrity, Data",
            "Atomicity, Concurrency, Integrity, Durability",
            "Accuracy, Consistency, Isolation, Data",
        ],
        correct_answer=0,
        explanation=(
            "ACID stands for Atomicity (all or nothing), Consistency (data remains valid), "
            "Isolation (transactions don't interfere), and Durability (permanent changes)."
        ),
        sql_example="BEGIN TRANSACTION; UPDATE accounts SET balance = balance - 100 WHERE id = 1; COMMIT;",
    ),
    QuizQuestion(
        id=12,
        difficulty=Difficulty.EXPERT,
        category="ADVANCED FUNCTIONS",
        question="Which function would you use to pivot rows into columns in SQL?",
        options=["PIVOT", "CROSS APPLY", "UNPIVOT", "All of the above"],
        correct_answer=3,
        explanation=(
            "All three can be used for pivoting data. PIVOT transforms rows to columns, "
            "CROSS APPLY can be used for complex pivoting, and UNPIVOT does the reverse."
        ),
        sql_example="SELECT * FROM sales PIVOT (SUM(amount) FOR month IN ([Jan], [Feb], [Mar])) AS pvt;",
    ),
]


def get_questions_by_difficulty(difficulty: Difficulty) -> list[QuizQuestion]:
    return [q for q in QUIZ_QUESTIONS if q.difficulty == difficulty]


def get_questions_by_category(category: str) -> list[QuizQuestion]:
    """Get questions for a category (case-insensitive)."""
    category_upper = category.upper()
    return [q for q in QUIZ_QUESTIONS if q.category.upper() == category_upper]


def get_random_questions(
    count: int = 10,
    rng: Random | None = None,
    questions: list[QuizQuestion] | None = None,
) -> list[QuizQuestion]:
    """Pick up to ``count`` distinct questions in random order.

    Args:
        count: Number of questions wanted.
        rng: Random source; pass a seeded instance for reproducible quizzes.
        questions: Pool to draw from (defaults to the whole bank).
    """
    pool = list(QUIZ_QUESTIONS if questions is None else questions)
    rng = rng or Random()
    return rng.sample(pool, min(count, len(pool)))
