help_string = '''
Each query gives the number of draws n and the occurrence probabilities, in
any order, as key=value pairs separated by spaces:

 n=<int>:
   The number of items drawn, eg n=23.

 N=<int>:
   Use N equally likely categories, eg N=365.

 prob=[...]:
   The occurrence probabilities as a list, eg prob=[0.5, 0.3, 0.2].
   They don't have to sum to 1, but the result only means something if they do.

 method=<name>:
   exact     Exact inclusion-exclusion over all partitions of n (default).
             Fine up to n of about 30.
   fast      The same sum with a faster partition enumerator, up to n of about 60.
   mase1992  The approximation of Mase (1992). Works for any n.

 noplot:
   Only print the probability, don't plot it.

Bare numbers are read as n, then N, so "23 365" means n=23 N=365.
Ex: 23 365
Ex: n=30 prob=[.4,.3,.2,.1] method=fast
Ex: n=100 N=10000 method=mase1992

After each query the probability of at least one collision is printed, and
the probability for 1, 2, ..., n draws is plotted.'''

intro_string = 'Getting started: Try typing 23 365 or n=5 prob=[.5,.3,.2].'
