from setuptools import setup, find_packages

setup(
    name='bash-bundler',
    version='0.2.0',
    description='Bundle bash scripts split with `# import` / `source` into one file',
    py_modules=['bash_bundler'],
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.11',
    install_requires=[
        'lark',
        'pydantic>=2.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'bash_bundler = bash_bundler:main',
        ],
    },
)
