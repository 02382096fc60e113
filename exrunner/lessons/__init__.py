"""Worked solutions for quizzes, collections, errors, iterators, threads and basics."""